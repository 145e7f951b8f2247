from functools import wraps
from django.contrib.auth.views import redirect_to_login
from django.http import HttpResponseForbidden


def admin_required(view_func):
    """Guard views reserved for the admin role."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        if not user.is_staff:
            return HttpResponseForbidden("Acesso restrito a administradores")
        return view_func(request, *args, **kwargs)
    return _wrapped


def student_required(view_func):
    """Guard views that need the logged-in user's student record."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        user = request.user
        if not user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        student = getattr(user, "student", None)
        if student is None:
            return HttpResponseForbidden("Nenhum cadastro de aluno vinculado")
        request.student = student
        return view_func(request, *args, **kwargs)
    return _wrapped
