"""
Unit Tests for the SkillCircuit Eligibility Statement
=====================================================

Version: 0.1.0
"""

from collections.abc import Callable
from typing import Any

import pytest

from zkjobs.config import Settings
from zkjobs.errors import InvalidRange
from zkjobs.zk.circuit import PROTOCOL, SkillCircuit
from zkjobs.zk.commitment import verify_commitment


@pytest.fixture
def skill_circuit() -> SkillCircuit:
    return SkillCircuit(key=b"unit-test-key")


class TestSkillCircuit:
    """Tests for SkillCircuit."""

    @pytest.mark.parametrize(
        "score,threshold,expected",
        [(80, 60, True), (60, 60, True), (59, 60, False), (0, 0, True), (0, 1, False)],
    )
    def test_is_satisfied(
        self,
        skill_circuit: SkillCircuit,
        score: int,
        threshold: int,
        expected: bool,
    ) -> None:
        assert skill_circuit.is_satisfied(score, threshold) is expected

    def test_domain_bounds(self, skill_circuit: SkillCircuit) -> None:
        assert skill_circuit.max_value == 2**32 - 1

        with pytest.raises(InvalidRange):
            skill_circuit.is_satisfied(2**32, 60)
        with pytest.raises(InvalidRange):
            skill_circuit.is_satisfied(80, -1)

    def test_from_settings(self, settings: Settings) -> None:
        circuit = SkillCircuit.from_settings(settings.circuit)

        assert circuit.name == "SkillCircuit"
        assert circuit.value_bits == settings.circuit.value_bits

    def test_empty_key_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not be empty"):
            SkillCircuit(key=b"")

    def test_proof_shape(self, skill_circuit: SkillCircuit) -> None:
        proof = skill_circuit.prove(80, 60)

        assert set(proof) == {"protocol", "circuit", "commitment", "tag"}
        assert proof["protocol"] == PROTOCOL
        assert proof["circuit"] == "SkillCircuit"
        assert proof["commitment"].startswith("0x")
        assert len(proof["tag"]) == 66

    def test_commitment_opens_to_score(self, skill_circuit: SkillCircuit) -> None:
        blinding = bytes(range(32))

        proof = skill_circuit.prove(80, 60, blinding_factor=blinding)

        assert verify_commitment(proof["commitment"], 80, blinding)

    def test_completeness(self, skill_circuit: SkillCircuit) -> None:
        """An honest proof for 80 >= 60 verifies against 60."""
        proof = skill_circuit.prove(skill_score=80, required_threshold=60)

        assert skill_circuit.verify(proof, required_threshold=60) is True

    def test_soundness(self, skill_circuit: SkillCircuit) -> None:
        """A proof for 50 against 60 does not verify against 60."""
        proof = skill_circuit.prove(skill_score=50, required_threshold=60)

        assert skill_circuit.verify(proof, required_threshold=60) is False

    def test_proof_bound_to_threshold(self, skill_circuit: SkillCircuit) -> None:
        proof = skill_circuit.prove(80, 60)

        assert skill_circuit.verify(proof, required_threshold=70) is False
        assert skill_circuit.verify(proof, required_threshold=50) is False

    def test_other_key_rejects(self, skill_circuit: SkillCircuit) -> None:
        proof = skill_circuit.prove(80, 60)

        assert SkillCircuit(key=b"another-key").verify(proof, 60) is False

    def test_tampered_commitment_rejected(self, skill_circuit: SkillCircuit) -> None:
        proof = skill_circuit.prove(80, 60)
        forged = {**proof, "commitment": "0x" + "11" * 32}

        assert skill_circuit.verify(forged, 60) is False

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda p: {k: v for k, v in p.items() if k != "tag"},
            lambda p: {**p, "protocol": "groth16"},
            lambda p: {**p, "circuit": "RangeCircuit"},
            lambda p: {**p, "tag": "0x1234"},
            lambda p: {**p, "commitment": 42},
        ],
    )
    def test_malformed_proof_raises_value_error(
        self,
        skill_circuit: SkillCircuit,
        mutate: Callable[[dict[str, Any]], dict[str, Any]],
    ) -> None:
        proof = mutate(skill_circuit.prove(80, 60))

        with pytest.raises(ValueError):
            skill_circuit.verify(proof, 60)

    def test_non_mapping_proof(self, skill_circuit: SkillCircuit) -> None:
        with pytest.raises(ValueError, match="mapping"):
            skill_circuit.verify(["not", "a", "proof"], 60)
