from django import forms

from members.helpers import get_unit_choices

from .models import EVENT_TYPES, REPETITION_CHOICES, VISIBILITY_LEVELS, Event


class EventForm(forms.ModelForm):
    type = forms.ChoiceField(
        label="Tipo",
        required=False,
        choices=[("", "Detectar pelo título")]
        + [(key, label) for key, (label, _) in EVENT_TYPES.items()],
    )
    unit = forms.ChoiceField(label="Unidade")
    visibility = forms.MultipleChoiceField(
        label="Visibilidade",
        choices=VISIBILITY_LEVELS,
        widget=forms.CheckboxSelectMultiple,
        required=False,
        initial=["todos"],
    )
    repetition = forms.ChoiceField(label="Repetição", choices=REPETITION_CHOICES, initial="none")

    class Meta:
        model = Event
        fields = [
            "title",
            "date",
            "time",
            "description",
            "location",
            "unit",
            "type",
            "visibility",
            "repetition",
            "repeat_until",
        ]
        widgets = {
            "date": forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"),
            "time": forms.TimeInput(attrs={"type": "time"}, format="%H:%M"),
            "repeat_until": forms.DateInput(attrs={"type": "date"}, format="%Y-%m-%d"),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["unit"].choices = get_unit_choices()

    def clean_visibility(self):
        visibility = self.cleaned_data.get("visibility") or []
        if not visibility:
            raise forms.ValidationError("Selecione pelo menos um nível de visibilidade")
        return visibility

    def clean(self):
        cleaned = super().clean()
        repetition = cleaned.get("repetition")
        repeat_until = cleaned.get("repeat_until")
        day = cleaned.get("date")
        if repetition and repetition != "none" and repeat_until and day and repeat_until <= day:
            self.add_error("repeat_until", "Data final deve ser posterior à data do evento")
        if repetition == "none":
            cleaned["repeat_until"] = None
        return cleaned
