"""
Тесты клиентской валидации форм и разбора числовых полей.
"""
from decimal import Decimal

import pytest
from hypothesis import given, strategies as st, settings

from expense_tracker.utils.exceptions import ValidationError
from expense_tracker.utils.validation import (
    parse_amount,
    parse_quantity,
    validate_email,
    validate_login_form,
    validate_password_confirmation,
    validate_signup_form,
)


@pytest.mark.parametrize("email, expected", [
    ("alice@example.com", True),
    ("  alice@example.com  ", True),
    ("a.b+c@sub.domain.ru", True),
    ("alice@example", False),
    ("alice example.com", False),
    ("al ice@example.com", False),
    ("", False),
    (None, False),
])
def test_validate_email(email, expected):
    assert validate_email(email) is expected


class TestLoginForm:
    def test_valid(self):
        validate_login_form("alice@example.com", "secret")

    def test_bad_email(self):
        with pytest.raises(ValidationError, match="корректный email"):
            validate_login_form("alice", "secret")

    def test_empty_password(self):
        with pytest.raises(ValidationError, match="введите пароль"):
            validate_login_form("alice@example.com", "")


class TestSignupForm:
    def test_valid(self):
        validate_signup_form("Alice", "alice@example.com", "secret1")

    def test_checks_name_first(self):
        with pytest.raises(ValidationError, match="введите имя"):
            validate_signup_form("   ", "bad", "")

    def test_short_password(self):
        with pytest.raises(ValidationError, match="не менее 6"):
            validate_signup_form("Alice", "alice@example.com", "12345")

    def test_password_mismatch(self):
        with pytest.raises(ValidationError, match="Пароли не совпадают"):
            validate_password_confirmation("secret1", "secret2")

    def test_password_match(self):
        validate_password_confirmation("secret1", "secret1")


class TestParseAmount:
    @pytest.mark.parametrize("value, expected", [
        ("100", Decimal("100.00")),
        ("1 234,5", Decimal("1234.50")),
        (" 0.01 ", Decimal("0.01")),
    ])
    def test_valid(self, value, expected):
        assert parse_amount(value) == expected

    @pytest.mark.parametrize("value", ["", None, "abc", "-5", "0", "NaN", "Infinity"])
    def test_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_amount(value)

    @pytest.mark.parametrize("value", ["1e30", "100000000000000000000000000000"])
    def test_too_large(self, value):
        with pytest.raises(ValidationError, match="Некорректная сумма"):
            parse_amount(value)

    def test_zero_allowed_for_prices(self):
        assert parse_amount("0", allow_zero=True) == Decimal("0.00")

    @given(value=st.decimals(min_value=Decimal("0.01"), max_value=Decimal("10000000"), places=2))
    @settings(max_examples=50, deadline=None)
    def test_positive_decimals_round_trip(self, value):
        assert parse_amount(str(value)) == value


class TestParseQuantity:
    def test_valid(self):
        assert parse_quantity(" 12 ") == 12

    @pytest.mark.parametrize("value", ["", None, "1.5", "abc"])
    def test_not_integer(self, value):
        with pytest.raises(ValidationError, match="целым числом"):
            parse_quantity(value)

    def test_negative(self):
        with pytest.raises(ValidationError, match="отрицательным"):
            parse_quantity("-1")
