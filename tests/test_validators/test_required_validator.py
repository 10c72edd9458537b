import pytest
from prompt_toolkit.document import Document
from prompt_toolkit.validation import ValidationError

from hydrakey.validators import required_validator


def test_required_validator_accepts_text():
    validator = required_validator("Name")
    validator.validate(Document("buffer.txt"))


@pytest.mark.parametrize("invalid", ["", " ", "\t"])
def test_required_validator_rejects_blank(invalid):
    validator = required_validator("Name")
    with pytest.raises(ValidationError) as exc_info:
        validator.validate(Document(invalid))
    assert "Name is required." in str(exc_info.value.message)
