from django import forms

from .helpers import get_unit_choices, validate_cpf
from .models import Student, Temple

DUPLICATE_EMAIL = "Já existe um aluno com este email."

DATE_WIDGET = forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d")

PERSONAL_FIELDS = [
    "full_name",
    "birth_date",
    "cpf",
    "rg",
    "phone",
    "religion",
]
ADDRESS_FIELDS = [
    "street",
    "number",
    "complement",
    "neighborhood",
    "zip_code",
    "city",
    "state",
]


class UnitChoiceMixin:
    def _set_unit_choices(self):
        if "unit" in self.fields:
            self.fields["unit"] = forms.ChoiceField(
                label="Unidade", choices=get_unit_choices()
            )


class StudentForm(UnitChoiceMixin, forms.ModelForm):
    is_admin = forms.BooleanField(label="Administrador", required=False)

    class Meta:
        model = Student
        fields = PERSONAL_FIELDS + ["email", "unit", "turma"] + ADDRESS_FIELDS + [
            "development_start_date",
            "internship_start_date",
            "magist_initiation_date",
            "not_entry_date",
            "master_magus_initiation_date",
            "is_founder",
            "is_active",
            "is_guest",
            "activity_status",
            "inactive_since",
            "last_activity",
        ]
        widgets = {
            name: DATE_WIDGET
            for name in (
                "birth_date",
                "development_start_date",
                "internship_start_date",
                "magist_initiation_date",
                "not_entry_date",
                "master_magus_initiation_date",
                "inactive_since",
                "last_activity",
            )
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._set_unit_choices()
        if self.instance.pk:
            self.fields["is_admin"].initial = self.instance.is_admin

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        clash = Student.objects.filter(email__iexact=email)
        if self.instance.pk:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError(DUPLICATE_EMAIL)
        return email

    def clean_cpf(self):
        cpf = self.cleaned_data.get("cpf", "")
        if cpf and not validate_cpf(cpf):
            raise forms.ValidationError("CPF inválido")
        return cpf


class ProfileForm(forms.ModelForm):
    """Fields a student may change on their own record."""

    class Meta:
        model = Student
        fields = PERSONAL_FIELDS + ADDRESS_FIELDS
        widgets = {"birth_date": DATE_WIDGET}

    def clean_cpf(self):
        cpf = self.cleaned_data.get("cpf", "")
        if cpf and not validate_cpf(cpf):
            raise forms.ValidationError("CPF inválido")
        return cpf


class RegistrationForm(ProfileForm):
    """Data an invited person fills in when accepting the invite."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ("full_name", "birth_date", "phone"):
            self.fields[name].required = True


class TempleForm(forms.ModelForm):
    founders_text = forms.CharField(
        label="Fundadores",
        required=False,
        help_text="Separe os nomes por vírgula",
    )

    class Meta:
        model = Temple
        fields = ["name", "city", "abbreviation", "address", "is_active", "photo"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields["founders_text"].initial = ", ".join(self.instance.founders or [])

    def clean_abbreviation(self):
        return self.cleaned_data["abbreviation"].strip().upper()

    def save(self, commit=True):
        temple = super().save(commit=False)
        raw = self.cleaned_data.get("founders_text") or ""
        temple.founders = [name.strip() for name in raw.split(",") if name.strip()]
        if commit:
            temple.save()
        return temple


class InviteForm(UnitChoiceMixin, forms.Form):
    full_name = forms.CharField(label="Nome completo", max_length=200)
    email = forms.EmailField(label="Email")
    unit = forms.CharField()
    turma = forms.CharField(label="Turma", required=False, max_length=64)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._set_unit_choices()

    def clean_email(self):
        email = self.cleaned_data["email"].strip().lower()
        if Student.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError(DUPLICATE_EMAIL)
        return email


class RejectForm(forms.Form):
    reason = forms.CharField(label="Motivo", widget=forms.Textarea)


class ImportSourceForm(forms.Form):
    csv_file = forms.FileField(label="Arquivo CSV", required=False)
    sheet_url = forms.URLField(label="URL do Google Sheets", required=False)

    def clean(self):
        cleaned = super().clean()
        if not cleaned.get("csv_file") and not cleaned.get("sheet_url"):
            raise forms.ValidationError("Envie um arquivo CSV ou informe a URL da planilha")
        return cleaned


class PhotoForm(forms.Form):
    photo = forms.ImageField(label="Foto")
    crop_x = forms.FloatField(required=False, widget=forms.HiddenInput)
    crop_y = forms.FloatField(required=False, widget=forms.HiddenInput)
    crop_width = forms.FloatField(required=False, widget=forms.HiddenInput)
    crop_height = forms.FloatField(required=False, widget=forms.HiddenInput)

    def crop_box(self):
        keys = ("crop_x", "crop_y", "crop_width", "crop_height")
        values = [self.cleaned_data.get(k) for k in keys]
        if any(v is None for v in values):
            return None
        return tuple(values)
