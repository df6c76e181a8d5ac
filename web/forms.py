from django import forms
from django.core.validators import FileExtensionValidator


class LogspecUploadForm(forms.Form):
    data_file = forms.FileField(
        label="Data File",
        validators=[FileExtensionValidator(["xlsx", "xls", "csv"])],
        widget=forms.ClearableFileInput(attrs={
            'class': 'form-control',
            'accept': '.xlsx,.xls,.csv'
        }),
        help_text="Excel file with Delivery, Ship Method and Country columns"
    )

    matrix_file = forms.FileField(
        label="Custom Matrix (Optional)",
        required=False,
        validators=[FileExtensionValidator(["txt"])],
        widget=forms.ClearableFileInput(attrs={
            'class': 'form-control',
            'accept': '.txt'
        }),
        help_text="Leave empty to use the current matrix"
    )

    reset_default = forms.BooleanField(
        label="Reset to default matrix",
        required=False,
        widget=forms.CheckboxInput(attrs={
            'class': 'form-check-input'
        })
    )
