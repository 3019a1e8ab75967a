"""Input validation for the keyword generation form."""

from typing import Optional

MIN_BUSINESS_LENGTH = 10


def validate_form_inputs(
    business: Optional[str],
    industry: Optional[str],
    keyword_type: Optional[str],
) -> list[str]:
    """Validate the keyword form fields.

    Args:
        business: Free-text business description.
        industry: Industry identifier.
        keyword_type: Keyword focus selector.

    Returns:
        List of human-readable error messages.  Empty when valid.
    """
    errors: list[str] = []

    if not business or not business.strip():
        errors.append("Business description is required")

    if not industry:
        errors.append("Industry selection is required")

    if not keyword_type:
        errors.append("Keyword type selection is required")

    if business and len(business.strip()) < MIN_BUSINESS_LENGTH:
        errors.append(
            f"Business description should be at least {MIN_BUSINESS_LENGTH} characters"
        )

    return errors
