"""
Error Taxonomy Tests
Tests for binmerkle/schemas/errors.py
"""
import pytest

from binmerkle.schemas.errors import (
    ConfigurationException,
    ErrorCodes,
    InvalidInputShapeException,
    MerkleError,
    MerkleException,
    ProofDecodeException,
)


class TestExceptions:

    def test_invalid_shape_carries_leaf_count(self):
        exc = InvalidInputShapeException("bad shape", leaf_count=3)

        assert isinstance(exc, MerkleException)
        assert exc.code == ErrorCodes.INVALID_INPUT_SHAPE
        assert exc.details == {"leaf_count": 3}
        assert str(exc) == "bad shape"

    def test_configuration_exception_key(self):
        exc = ConfigurationException("bad value", key="odd_level_policy")

        assert exc.code == ErrorCodes.CONFIG_INVALID
        assert exc.details["key"] == "odd_level_policy"

    def test_repr(self):
        exc = ProofDecodeException("broken")

        assert repr(exc) == "ProofDecodeException(code='PROOF_DECODE_ERROR', message='broken')"


class TestErrorModel:

    def test_exception_to_model_and_back(self):
        exc = InvalidInputShapeException("empty", leaf_count=0)

        model = exc.to_error_model()
        assert model.code == ErrorCodes.INVALID_INPUT_SHAPE
        assert model.details == {"leaf_count": 0}

        again = model.to_exception()
        assert again.code == exc.code
        assert again.message == exc.message

    def test_model_forbids_extra_fields(self):
        with pytest.raises(Exception):
            MerkleError(code="X", message="y", unexpected=True)

    def test_model_json(self):
        model = MerkleError(code=ErrorCodes.PROOF_DECODE_ERROR, message="m")

        assert '"code":"PROOF_DECODE_ERROR"' in model.model_dump_json()
