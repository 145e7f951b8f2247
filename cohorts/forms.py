from django import forms

from members.helpers import get_unit_choices

from .models import Cohort, Lesson


class CohortForm(forms.ModelForm):
    unit = forms.ChoiceField(label="Unidade")

    class Meta:
        model = Cohort
        fields = ["unit", "number", "fee", "start_date", "hour", "duration_months", "status"]
        labels = {
            "number": "Número",
            "fee": "Valor",
            "start_date": "Data de início",
            "hour": "Horário",
            "duration_months": "Duração (meses)",
        }
        widgets = {
            "start_date": forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"),
            "hour": forms.TimeInput(attrs={"type": "time"}, format="%H:%M"),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["unit"].choices = get_unit_choices()

    def clean_number(self):
        number = self.cleaned_data["number"]
        if not number or number < 1:
            raise forms.ValidationError("Número da turma deve ser maior que 0")
        return number


class LessonForm(forms.ModelForm):
    class Meta:
        model = Lesson
        fields = ["date", "content", "done"]
        labels = {"date": "Data", "content": "Conteúdo", "done": "Realizada"}
        widgets = {"date": forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d")}
