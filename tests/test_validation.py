"""Tests for input validation rules."""

import pytest
from pydantic import ValidationError

from laundry_service.schemas.auth import SignupRequest, ProfileUpdate
from laundry_service.schemas.order import CustomerDetails
from laundry_service.schemas.validators import normalize_phone, normalize_optional_phone


class TestPhoneValidation:
    def test_rejects_short_number(self):
        with pytest.raises(ValueError):
            normalize_phone("12345")

    def test_accepts_ten_digits(self):
        assert normalize_phone("9876543210") == "9876543210"

    def test_strips_country_code_and_separators(self):
        assert normalize_phone(" +91 98765-43210 ") == "9876543210"

    def test_rejects_other_country_codes(self):
        with pytest.raises(ValueError):
            normalize_phone("+449876543210")

    def test_optional_phone_allows_empty(self):
        assert normalize_optional_phone("") == ""
        assert normalize_optional_phone(None) == ""


class TestSignupValidation:
    def test_password_of_seven_characters_rejected(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="a@campus.edu", password="1234567")

    def test_password_of_eight_characters_accepted(self):
        data = SignupRequest(email="a@campus.edu", password="12345678")
        assert data.password == "12345678"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="not-an-email", password="12345678")

    def test_invalid_gender_rejected(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="a@campus.edu", password="12345678", gender="other")

    def test_one_letter_name_rejected(self):
        with pytest.raises(ValidationError):
            SignupRequest(email="a@campus.edu", password="12345678", student_name="A")

    def test_mobile_number_normalized(self):
        data = SignupRequest(email="a@campus.edu", password="12345678", mobile_no="+919876543210")
        assert data.mobile_no == "9876543210"

    def test_signup_endpoint_enforces_password_length(self, client):
        short = client.post("/auth/signup", json={"email": "x@campus.edu", "password": "1234567"})
        assert short.status_code == 422

        ok = client.post("/auth/signup", json={"email": "x@campus.edu", "password": "12345678"})
        assert ok.status_code == 201


class TestProfileAndCheckoutValidation:
    def test_profile_update_requires_valid_phone(self):
        with pytest.raises(ValidationError):
            ProfileUpdate(
                student_name="Asha", mobile_no="12345", student_id="S1", room_number="G-4", gender="female"
            )

    def test_profile_update_room_number_length(self):
        with pytest.raises(ValidationError):
            ProfileUpdate(
                student_name="Asha", mobile_no="9876543210", student_id="S1", room_number="R" * 21, gender="female"
            )

    def test_customer_details_normalizes_phone(self):
        details = CustomerDetails(student_name="  Asha  ", mobile_no="98765 43210")
        assert details.student_name == "Asha"
        assert details.mobile_no == "9876543210"
