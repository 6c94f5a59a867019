import pytest

from bouncer.validation import ValidationError


@pytest.mark.parametrize("value", [None, "", "   "])
def test_optional_short_circuits_absent_and_blank_values(make, value):
    validator = make(value).optional()
    assert validator.is_optional()
    validator.check(False).required().is_email().to_int()


def test_optional_does_not_short_circuit_defined_values(make):
    validator = make(42).optional()
    assert not validator.is_optional()
    with pytest.raises(ValidationError):
        validator.check(False)


@pytest.mark.parametrize("value", ["", "   "])
def test_optional_removes_blank_strings_from_bag(make, vals, value):
    make(value).optional()
    assert "test" not in vals


def test_optional_keeps_absent_key_in_bag(make, vals):
    make(None).optional()
    assert "test" in vals
    assert vals["test"] is None


def test_optional_state_is_lost_once_value_is_defined(make, vals):
    validator = make(None).optional()
    vals["test"] = 42
    assert not validator.is_optional()
    with pytest.raises(ValidationError):
        validator.check(False)


def test_optional_state_is_not_regained_when_value_disappears(make, vals):
    validator = make(None).optional()
    vals["test"] = 42
    assert not validator.is_optional()
    vals["test"] = None
    assert not validator.is_optional()


def test_optional_state_survives_blank_string_written_later(make, vals):
    validator = make(None).optional()
    vals["test"] = "  "
    assert validator.is_optional()


def test_optional_on_defined_value_then_removed_is_active(make, vals):
    validator = make(5).optional()
    vals["test"] = None
    with pytest.raises(ValidationError):
        validator.check(False)


def test_converters_are_skipped_while_optional(make, vals):
    make(None).optional().default_to(5).to_array().to_string()
    assert vals["test"] is None


def test_optional_blank_string_stays_removed_after_chain(make, vals):
    make("").optional().to_string().trim()
    assert "test" not in vals


def test_optional_json_chain_leaves_value_unset(make, vals):
    (
        make(None)
        .optional()
        .from_json()
        .tap(lambda x: x["foo"])
        .to_array()
    )
    assert vals["test"] is None


def test_optional_then_active_chain_validates(make, vals):
    validator = make("  ").optional()
    vals["test"] = "kate@example.com"
    validator.is_email()
    with pytest.raises(ValidationError):
        validator.set_value("kate").is_email()
