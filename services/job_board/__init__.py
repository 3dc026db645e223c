"""
Job Board Service
=================

HTTP surface for the job board ledger contract actions.
"""
