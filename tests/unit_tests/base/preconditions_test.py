import pytest

from valuekit.base.errors import (
    IllegalArgumentError,
    IllegalStateError,
    NullArgumentError
)
from valuekit.base.preconditions import (
    check_argument,
    check_element_index,
    check_not_null,
    check_position_index,
    check_position_indexes,
    check_state,
    format_message
)


class TestFormatMessage:
    def test_should_substitute_placeholders_in_order(self):
        assert format_message('%s and %s', 'a', 'b') == 'a and b'

    def test_should_append_surplus_arguments(self):
        assert format_message('%s', 'a', 'b', 'c') == 'a [b, c]'

    def test_should_keep_unused_placeholders(self):
        assert format_message('%s and %s', 'a') == 'a and %s'

    def test_should_render_none_template(self):
        assert format_message(None) == 'None'
        assert format_message(None, 'a') == 'None [a]'

    def test_should_render_none_argument(self):
        assert format_message('value: %s', None) == 'value: None'


class TestCheckArgument:
    def test_should_pass_if_expression_is_true(self):
        check_argument(True)

    def test_should_raise_illegal_argument_error(self):
        with pytest.raises(IllegalArgumentError):
            check_argument(False)

    def test_should_use_formatted_error_message(self):
        with pytest.raises(IllegalArgumentError, match='expected 1 but was 2'):
            check_argument(False, 'expected %s but was %s', 1, 2)

    def test_should_not_format_message_if_expression_is_true(self):
        check_argument(True, '%s', object())


class TestCheckState:
    def test_should_pass_if_expression_is_true(self):
        check_state(True)

    def test_should_raise_illegal_state_error(self):
        with pytest.raises(IllegalStateError, match='not ready'):
            check_state(False, 'not ready')


class TestCheckNotNull:
    def test_should_return_reference(self):
        assert check_not_null('value_1') == 'value_1'

    def test_should_return_falsy_reference(self):
        assert check_not_null(0) == 0

    def test_should_raise_null_argument_error(self):
        with pytest.raises(NullArgumentError):
            check_not_null(None)

    def test_should_use_formatted_error_message(self):
        with pytest.raises(NullArgumentError, match='name is required'):
            check_not_null(None, '%s is required', 'name')


class TestCheckElementIndex:
    def test_should_return_valid_index(self):
        assert check_element_index(0, 1) == 0

    def test_should_reject_negative_index(self):
        with pytest.raises(IndexError, match=r'index \(-1\) must not be negative'):
            check_element_index(-1, 1)

    def test_should_reject_index_equal_to_size(self):
        with pytest.raises(IndexError, match=r'index \(1\) must be less than size \(1\)'):
            check_element_index(1, 1)

    def test_should_use_description(self):
        with pytest.raises(IndexError, match=r'^row \(2\)'):
            check_element_index(2, 1, desc='row')

    def test_should_reject_negative_size(self):
        with pytest.raises(IllegalArgumentError, match='negative size: -1'):
            check_element_index(0, -1)


class TestCheckPositionIndex:
    def test_should_allow_index_equal_to_size(self):
        assert check_position_index(1, 1) == 1

    def test_should_reject_index_greater_than_size(self):
        with pytest.raises(
            IndexError,
            match=r'index \(2\) must not be greater than size \(1\)'
        ):
            check_position_index(2, 1)

    def test_should_reject_negative_index(self):
        with pytest.raises(IndexError, match='must not be negative'):
            check_position_index(-1, 1)


class TestCheckPositionIndexes:
    def test_should_allow_valid_range(self):
        check_position_indexes(0, 2, 2)

    def test_should_reject_invalid_start_index(self):
        with pytest.raises(IndexError, match=r'start index \(-1\) must not be negative'):
            check_position_indexes(-1, 1, 2)

    def test_should_reject_invalid_end_index(self):
        with pytest.raises(
            IndexError,
            match=r'end index \(3\) must not be greater than size \(2\)'
        ):
            check_position_indexes(0, 3, 2)

    def test_should_reject_end_index_before_start_index(self):
        with pytest.raises(
            IndexError,
            match=r'end index \(0\) must not be less than start index \(1\)'
        ):
            check_position_indexes(1, 0, 2)
