"""
Proof Server
============

Reference proving backend for `SkillCircuit`.
"""
