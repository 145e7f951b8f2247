from django import forms
from django.contrib.auth import password_validation


class ChangePasswordForm(forms.Form):
    current_password = forms.CharField(
        label="Senha atual", strip=False, required=False, widget=forms.PasswordInput
    )
    new_password = forms.CharField(
        label="Nova senha", strip=False, required=False, widget=forms.PasswordInput
    )
    confirm_password = forms.CharField(
        label="Confirmar nova senha", strip=False, required=False, widget=forms.PasswordInput
    )

    def __init__(self, user, *args, **kwargs):
        self.user = user
        super().__init__(*args, **kwargs)

    def clean(self):
        cleaned = super().clean()
        current = cleaned.get("current_password")
        new = cleaned.get("new_password")
        confirm = cleaned.get("confirm_password")
        if not current or not new or not confirm:
            raise forms.ValidationError("Todos os campos são obrigatórios")
        if not self.user.check_password(current):
            self.add_error("current_password", "Senha atual incorreta")
            return cleaned
        if new != confirm:
            self.add_error("confirm_password", "A nova senha e a confirmação não coincidem")
            return cleaned
        if new == current:
            self.add_error("new_password", "A nova senha deve ser diferente da senha atual")
            return cleaned
        try:
            password_validation.validate_password(new, self.user)
        except forms.ValidationError as exc:
            self.add_error("new_password", exc)
        return cleaned
