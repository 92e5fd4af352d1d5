"""StringNode validation, casting and construction tests"""

from datetime import date, datetime, timedelta, timezone

import pytest

from nodeschema import CastError, InvalidSchemaError, StringNode, register_format


class TestStringValidation:
    @pytest.mark.parametrize("value", ["ab", "abc", "abcd"])
    def test_length_within_bounds(self, value):
        assert StringNode(min_length=2, max_length=4).validate(value).valid

    def test_too_short(self):
        result = StringNode(min_length=2, max_length=4).validate("a")
        assert result.messages_at() == ["String is 1 characters long but must be at least 2."]

    def test_too_long(self):
        result = StringNode(min_length=2, max_length=4).validate("abcde")
        assert result.messages_at() == ["String is 5 characters long but must be at most 4."]

    def test_pattern_is_searched(self):
        node = StringNode(pattern="b")
        assert node.validate("abc").valid

        result = StringNode(pattern="^a").validate("ba")
        assert result.messages_at() == ['String does not match pattern "^a".']

    def test_type_mismatch_stops_further_checks(self):
        result = StringNode(min_length=3, pattern="x").validate(12)
        assert result.messages_at() == ['Invalid type, got type "integer", expected "string".']

    def test_absent_value(self):
        assert StringNode().validate(None).valid
        result = StringNode(required=True).validate(None)
        assert result.messages_at() == ["Value must be given."]

    def test_default_replaces_absent_value(self):
        result = StringNode(default="abc", min_length=5).validate(None)
        assert result.messages_at() == ["String is 3 characters long but must be at least 5."]

    def test_enum(self):
        node = StringNode(enum=["a", "b"])
        assert node.validate("a").valid
        assert node.validate("c").messages_at() == ["Value not included in enum ['a', 'b']."]

    @pytest.mark.parametrize(
        "fmt,good,bad",
        [
            ("date", "2020-01-31", "2020-13-01"),
            ("date-time", "2020-01-31T10:20:30Z", "2020-01-31 10:20:30"),
            ("email", "someone@example.com", "someone@"),
            ("boolean", "false", "no"),
            ("integer", "-12", "12.5"),
            ("number", "12.5", "1e5"),
        ],
    )
    def test_formats(self, fmt, good, bad):
        node = StringNode(format=fmt)
        assert node.validate(good).valid
        assert node.validate(bad).messages_at() == [f'String does not match format "{fmt}".']

    def test_binary_format_is_marker_only(self):
        assert StringNode(format="binary").validate("\x00\x01 anything").valid

    def test_format_name_is_normalized(self):
        assert StringNode(format="date_time").options.format == "date-time"


class TestFormatDelegation:
    def test_cast_value_is_validated_by_delegated_node(self):
        node = StringNode(format="integer", format_options={"minimum": 3})
        assert node.validate("5").valid
        assert node.validate("2").messages_at() == ["Value must have a minimum of 3."]

    def test_pattern_failure_skips_delegation(self):
        node = StringNode(format="integer", format_options={"minimum": 3})
        assert node.validate("abc").messages_at() == ['String does not match format "integer".']

    def test_delegated_node_is_built_once(self):
        node = StringNode(format="number", format_options={"maximum": 1})
        assert node.format_node is not None
        assert node.format_node.parent is node
        assert node.children == (node.format_node,)

    def test_format_options_need_a_node_backed_format(self):
        with pytest.raises(InvalidSchemaError):
            StringNode(format="email", format_options={})
        with pytest.raises(InvalidSchemaError):
            StringNode(format_options={"minimum": 1})

    def test_invalid_format_options_fail_at_construction(self):
        with pytest.raises(InvalidSchemaError):
            StringNode(format="integer", format_options={"minimum": 5, "maximum": 1})


class TestStringCast:
    def test_boolean_cast_only_literal_true_is_true(self):
        # "false" and any other token cast to False; this asymmetry is deliberate.
        node = StringNode(format="boolean")
        assert node.cast("true") is True
        assert node.cast("false") is False
        assert node.cast("yes") is False
        assert node.cast("TRUE") is False

    def test_boolean_cast_accepts_canonical_values(self):
        node = StringNode(format="boolean")
        assert node.cast(node.cast("true")) is True
        assert node.cast(False) is False

    def test_date(self):
        node = StringNode(format="date")
        assert node.cast("2020-01-31") == date(2020, 1, 31)
        assert node.cast("20200131") == date(2020, 1, 31)
        assert node.cast(date(2021, 5, 1)) == date(2021, 5, 1)

    def test_impossible_date_raises(self):
        with pytest.raises(CastError):
            StringNode(format="date").cast("2021-02-30")

    def test_date_time(self):
        node = StringNode(format="date-time")
        assert node.cast("2020-01-31T10:20:30Z") == datetime(2020, 1, 31, 10, 20, 30, tzinfo=timezone.utc)

        value = node.cast("2020-01-31T10:20:30.5+02:00")
        assert value.microsecond == 500000
        assert value.utcoffset() == timedelta(hours=2)

    def test_date_time_without_offset_is_utc(self):
        value = StringNode(format="date-time").cast("2020-01-31T10:20:30")
        assert value.tzinfo == timezone.utc

    def test_integer(self):
        node = StringNode(format="integer")
        assert node.cast("42") == 42
        assert node.cast("-7") == -7
        assert node.cast(3) == 3

    @pytest.mark.parametrize("value", ["4x", " 42", "1_000", "", "0x10"])
    def test_integer_parsing_is_strict(self, value):
        with pytest.raises(CastError):
            StringNode(format="integer").cast(value)

    def test_number(self):
        node = StringNode(format="number")
        assert node.cast("1.5") == 1.5
        assert node.cast("2") == 2.0
        with pytest.raises(CastError):
            node.cast("1e5")

    def test_cast_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            StringNode(format="number").cast("abc")

    def test_without_format(self):
        node = StringNode(default="fallback")
        assert node.cast("text") == "text"
        assert node.cast(None) == "fallback"
        assert StringNode(format="integer").cast(None) is None

    def test_default_is_cast(self):
        assert StringNode(format="integer", default="5").cast(None) == 5

    @pytest.mark.parametrize(
        "fmt,value",
        [
            ("boolean", "true"),
            ("date", "2020-02-29"),
            ("date-time", "2020-01-31T10:20:30.25-05:30"),
            ("integer", "15"),
            ("number", "2.75"),
            ("email", "a@b.io"),
        ],
    )
    def test_cast_is_idempotent(self, fmt, value):
        node = StringNode(format=fmt)
        once = node.cast(value)
        assert node.cast(once) == once


class TestStringConstruction:
    def test_unsupported_format(self):
        with pytest.raises(InvalidSchemaError, match="not supported"):
            StringNode(format="uuid-ish")

    def test_inverted_bounds(self):
        with pytest.raises(InvalidSchemaError):
            StringNode(min_length=5, max_length=2)

    @pytest.mark.parametrize("bad", [-1, "3", 1.5, True])
    def test_bounds_must_be_non_negative_integers(self, bad):
        with pytest.raises(InvalidSchemaError):
            StringNode(min_length=bad)

    def test_invalid_pattern(self):
        with pytest.raises(InvalidSchemaError):
            StringNode(pattern="(")

    def test_unknown_option(self):
        with pytest.raises(InvalidSchemaError, match="does not support"):
            StringNode(min_items=1)

    def test_options_are_frozen(self):
        node = StringNode(min_length=1)
        with pytest.raises(AttributeError):
            node.options.min_length = 3


class TestCustomFormats:
    def test_registered_format_is_pattern_checked(self, custom_registrations):
        formats, _ = custom_registrations
        register_format("hex", "[0-9a-f]+")
        formats.append("hex")

        node = StringNode(format="hex")
        assert node.validate("c0ffee").valid
        assert node.validate("zz").messages_at() == ['String does not match format "hex".']
        assert node.cast("c0ffee") == "c0ffee"

    def test_builtin_formats_cannot_be_replaced(self):
        with pytest.raises(InvalidSchemaError):
            register_format("date", ".*")

    def test_invalid_format_pattern(self):
        with pytest.raises(InvalidSchemaError):
            register_format("broken", "(")
