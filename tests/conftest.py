import pytest

from symforms import SimplificationEngine, SimplifyConfig


@pytest.fixture
def engine():
	return SimplificationEngine()


@pytest.fixture
def verifying_engine():
	return SimplificationEngine(SimplifyConfig(verify_forms=True))
