from django import forms

from .models import Status


class UniversityForm(forms.Form):
    """
    Add/Edit form for a university application.

    Bounds are mirrored as HTML attributes (min/max/step/required) so the
    browser catches most mistakes before the form is posted.
    """
    name = forms.CharField(
        max_length=200,
        widget=forms.TextInput(attrs={
            "placeholder": "e.g., Harvard University",
            "class": "form-control",
        }),
    )
    country = forms.CharField(
        max_length=100,
        widget=forms.TextInput(attrs={
            "placeholder": "e.g., United States",
            "class": "form-control",
        }),
    )
    deadline = forms.DateField(
        label="Application deadline",
        widget=forms.DateInput(attrs={"type": "date", "class": "form-control"}, format="%Y-%m-%d"),
    )
    status = forms.ChoiceField(
        label="Application status",
        choices=Status.choices,
        initial=Status.APPLYING,
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    scholarship_percentage = forms.DecimalField(
        label="Scholarship percentage",
        min_value=0,
        max_value=100,
        decimal_places=1,
        widget=forms.NumberInput(attrs={
            "step": "0.1",
            "placeholder": "e.g., 25.5",
            "class": "form-control",
        }),
    )
    application_fees = forms.DecimalField(
        label="Application fees ($)",
        min_value=0,
        decimal_places=2,
        widget=forms.NumberInput(attrs={
            "step": "0.01",
            "placeholder": "e.g., 75.00",
            "class": "form-control",
        }),
    )
    notes = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={
            "rows": 4,
            "placeholder": "Add any additional notes about this university application...",
            "class": "form-control",
        }),
    )

    def clean_name(self):
        name = (self.cleaned_data.get("name") or "").strip()
        if not name:
            raise forms.ValidationError("Please enter a university name.")
        return name

    def clean_country(self):
        country = (self.cleaned_data.get("country") or "").strip()
        if not country:
            raise forms.ValidationError("Please enter a country.")
        return country

    def to_payload(self) -> dict:
        """cleaned_data as a draft/patch for the record store."""
        data = self.cleaned_data
        return {
            "name": data["name"],
            "country": data["country"],
            "deadline": data["deadline"],
            "status": data["status"],
            "scholarship_percentage": float(data["scholarship_percentage"]),
            "application_fees": float(data["application_fees"]),
            "notes": data.get("notes") or "",
        }
