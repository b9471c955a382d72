from mixer_admin import validation

CUSTOMER = {
    "company_name": "Shree Ganesh Builders",
    "contact_person": "Rahul Patil",
    "email": "rahul@shree.in",
    "phone": "98765 43210",
    "site_location": "Hinjewadi, Pune",
    "gst_number": "27AAPFS1234K1Z5",
}


def test_valid_customer():
    assert validation.validate_customer(CUSTOMER).is_valid


def test_customer_required_fields_only_on_create():
    created = validation.validate_customer({})
    updated = validation.validate_customer({"city": "Pune"}, is_update=True)

    assert "Company name is required" in created.errors
    assert "Site location is required" in created.errors
    assert updated.is_valid


def test_customer_format_errors():
    result = validation.validate_customer(
        {**CUSTOMER, "email": "rahul", "phone": "12345", "gst_number": "GST123"}
    )

    assert result.to_dict() == {
        "is_valid": False,
        "errors": [
            "Valid email address is required",
            "Phone number must be 10-15 digits",
            "Invalid GST number format",
        ],
    }


def test_gst_is_optional_but_checked():
    assert validation.is_valid_gst(None)
    assert validation.is_valid_gst("")
    assert validation.is_valid_gst("27aapfs1234k1z5")
    assert not validation.is_valid_gst("27AAPFS1234K1Z")


def test_company_requires_contact_details():
    result = validation.validate_company({"company_name": "Mixer Rentals"})

    assert result.errors == [
        "Email is required",
        "Phone number is required",
        "Address is required",
    ]


def test_image_limits():
    assert validation.validate_logo("image/gif", 1024).is_valid
    assert validation.validate_logo(None, None).errors == ["Logo file is required"]
    assert not validation.validate_signature("image/gif", 1024).is_valid
    assert validation.validate_signature("image/png", 2 * validation.MB).is_valid
    assert not validation.validate_signature("image/png", 2 * validation.MB + 1).is_valid
