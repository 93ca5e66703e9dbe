import pytest

from edi_intake.config import IntakeSettings


@pytest.fixture
def settings():
    return IntakeSettings(legacy_encoding="cp1250", strict=False)
