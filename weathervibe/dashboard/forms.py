from __future__ import annotations

from django import forms
from django.core.validators import RegexValidator

from weathervibe.core.entities import Location


class ZipSearchForm(forms.Form):
    """US 5-digit ZIP lookup; an empty value means the default location."""

    zip = forms.CharField(
        required=False,
        max_length=5,
        validators=[RegexValidator(r"^\d{5}$", "Enter a 5-digit ZIP code.")],
    )

    def location(self) -> Location | None:
        """The searched location, or ``None`` to use the defaults."""
        if not self.is_valid() or not self.cleaned_data["zip"]:
            return None
        return Location.postal(f"{self.cleaned_data['zip']},US")
