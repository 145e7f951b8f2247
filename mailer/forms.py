from django import forms

from members.helpers import get_unit_choices


class BulkEmailForm(forms.Form):
    unit = forms.ChoiceField(label="Destinatários", required=False)
    subject = forms.CharField(label="Assunto", max_length=255)
    body = forms.CharField(label="Mensagem", widget=forms.Textarea)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["unit"].choices = [("", "Todos os membros ativos")] + [
            (abbr, name) for abbr, name in get_unit_choices()
        ]
