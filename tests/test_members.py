"""Student records, profile pages, temples and photos."""

import datetime
import io
import types

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management import call_command
from django.urls import reverse
from PIL import Image

from accounts.models import User
from members import helpers
from members.forms import DUPLICATE_EMAIL
from members.models import Student, Temple
from members.photos import PhotoError, process_photo

VALID_CPF = "529.982.247-25"


def _image_bytes(size=(800, 600), fmt="PNG"):
    buffer = io.BytesIO()
    Image.new("RGB", size, color=(120, 40, 200)).save(buffer, format=fmt)
    return buffer.getvalue()


def _student_post(**overrides):
    data = {
        "full_name": "Maria Souza",
        "email": "maria@example.com",
        "unit": "SP",
        "activity_status": "active",
        "is_active": "on",
    }
    data.update(overrides)
    return data


@pytest.mark.parametrize(
    "cpf, valid",
    [
        (VALID_CPF, True),
        ("52998224725", True),
        ("529.982.247-24", False),
        ("111.111.111-11", False),
        ("123", False),
        ("", False),
    ],
)
def test_validate_cpf(cpf, valid):
    assert helpers.validate_cpf(cpf) is valid


def test_formatting_helpers():
    assert helpers.format_cpf("52998224725") == VALID_CPF
    assert helpers.format_phone("11987654321") == "(11) 98765-4321"
    assert helpers.format_phone("1133334444") == "(11) 3333-4444"
    assert helpers.format_date("2024-03-05") == "05/03/2024"
    assert helpers.format_date(None) == ""


def test_parse_date():
    assert helpers.parse_date("15/03/1990") == datetime.date(1990, 3, 15)
    assert helpers.parse_date("1990-03-15") == datetime.date(1990, 3, 15)
    with pytest.raises(ValueError):
        helpers.parse_date("ontem")


def test_status_stage_uses_furthest_step():
    """The most advanced dated step wins."""
    member = types.SimpleNamespace(
        development_start_date=datetime.date(2020, 1, 1),
        internship_start_date=datetime.date(2021, 1, 1),
        magist_initiation_date=None,
        not_entry_date=None,
        master_magus_initiation_date=None,
    )
    assert helpers.status_stage(member) == ("internship", "Estagiando")
    assert helpers.status_stage(types.SimpleNamespace()) == ("new", "Novo Membro")


def test_development_progress():
    # Arrange
    member = types.SimpleNamespace(development_start_date=datetime.date(2025, 1, 1))
    records = [types.SimpleNamespace(type="development")] * 5 + [
        types.SimpleNamespace(type="work")
    ]
    # Act
    progress = helpers.development_progress(member, records, today=datetime.date(2025, 3, 12))
    # Assert: 10 weeks elapsed, 5 sessions attended
    assert progress == 50.0


def test_internship_progress_never_negative():
    member = types.SimpleNamespace(internship_start_date=datetime.date(2027, 6, 1))
    progress = helpers.internship_progress(member, [], today=datetime.date(2026, 10, 19))
    assert progress == 0.0


def test_parse_id():
    assert helpers.parse_id("12") == 12
    assert helpers.parse_id("abc") is None
    assert helpers.parse_id(None) is None


def test_internship_progress_adds_bonus():
    member = types.SimpleNamespace(internship_start_date=datetime.date(2025, 1, 15))
    records = [types.SimpleNamespace(type="work"), types.SimpleNamespace(type="event")]
    progress = helpers.internship_progress(member, records, today=datetime.date(2025, 4, 15))
    assert progress == 54.0
    assert helpers.internship_progress(member, records * 50, today=datetime.date(2025, 4, 15)) == 100.0


def test_milestones_are_chronological():
    member = types.SimpleNamespace(
        development_start_date=datetime.date(2020, 5, 1),
        internship_start_date=datetime.date(2021, 2, 1),
        magist_initiation_date=datetime.date(2019, 1, 1),
        not_entry_date=None,
        master_magus_initiation_date=None,
    )
    titles = [title for _, title in helpers.milestones(member)]
    assert titles == [
        "Iniciação como Magista",
        "Início do Desenvolvimento Mágicko",
        "Início do Estágio",
    ]


def test_inactivity_helpers():
    today = datetime.date(2025, 6, 30)
    member = types.SimpleNamespace(is_active=False, last_activity=datetime.date(2025, 2, 1))
    assert not helpers.is_recently_active(member, today=today)
    assert helpers.calculate_inactive_since(member, today=today) == datetime.date(2025, 3, 30)
    member.last_activity = datetime.date(2025, 6, 1)
    assert helpers.is_recently_active(member, today=today)
    assert helpers.calculate_inactive_since(member, today=today) is None


@pytest.mark.django_db
def test_unit_choices_fall_back_to_founding_units():
    assert helpers.get_unit_choices() == helpers.FALLBACK_UNITS
    Temple.objects.create(name="Templo BH", city="Belo Horizonte", abbreviation="BH")
    assert helpers.get_unit_choices() == [("BH", "Templo BH")]
    assert helpers.unit_label("XX") == "Templo XX"


def test_add_student_creates_login_user(admin_client):
    """Adding a student also creates a login with a temporary password."""
    # Act
    response = admin_client.post(reverse("members:student_add"), _student_post(cpf=VALID_CPF))
    # Assert
    student = Student.objects.get(email="maria@example.com")
    assert response.status_code == 302
    assert response.url == reverse("members:student_detail", args=[student.id])
    assert student.user is not None
    assert student.user.must_change_password
    assert not student.user.is_staff


def test_add_student_rejects_duplicate_email(admin_client, student):
    """Emails are unique regardless of case."""
    # Act
    response = admin_client.post(
        reverse("members:student_add"), _student_post(email="JOAO@example.com")
    )
    # Assert
    assert response.status_code == 200
    assert DUPLICATE_EMAIL in response.context["form"].errors["email"]
    assert Student.objects.filter(email__iexact="joao@example.com").count() == 1


def test_add_student_rejects_invalid_cpf(admin_client):
    response = admin_client.post(
        reverse("members:student_add"), _student_post(cpf="123.456.789-00")
    )
    assert response.status_code == 200
    assert "CPF inválido" in response.context["form"].errors["cpf"]


def test_edit_student_syncs_login(admin_client, student):
    """Email and admin flag changes reach the linked login user."""
    # Act
    response = admin_client.post(
        reverse("members:student_edit", args=[student.id]),
        _student_post(full_name=student.full_name, email="joao.novo@example.com", is_admin="on"),
    )
    # Assert
    assert response.status_code == 302
    student.user.refresh_from_db()
    assert student.user.email == "joao.novo@example.com"
    assert student.user.is_staff


def test_delete_student_removes_login(admin_client, student):
    response = admin_client.post(reverse("members:student_delete", args=[student.id]))
    assert response.status_code == 302
    assert not Student.objects.filter(id=student.id).exists()
    assert not User.objects.filter(email="joao@example.com").exists()


def test_student_list_filters(admin_client, student, make_student):
    make_student("Carla Dias", unit="BH", is_guest=True)
    response = admin_client.get(reverse("members:student_list"), {"q": "joão"})
    assert list(response.context["students"]) == [student]
    response = admin_client.get(reverse("members:student_list"), {"status": "guest"})
    assert [s.full_name for s in response.context["students"]] == ["Carla Dias"]


def test_student_detail(admin_client, student):
    response = admin_client.get(reverse("members:student_detail", args=[student.id]))
    assert response.status_code == 200
    assert response.context["stage"] == ("development", "Desenvolvimento")


def test_profile_edit(student_client, student):
    # Act
    response = student_client.post(
        reverse("members:profile_edit"),
        {"full_name": "João da Silva Santos", "phone": "11987654321", "cpf": VALID_CPF},
    )
    # Assert
    assert response.status_code == 302
    student.refresh_from_db()
    assert student.full_name == "João da Silva Santos"
    assert student.cpf == VALID_CPF
    # the email stays under admin control
    assert student.email == "joao@example.com"


def test_process_photo_center_crops_to_portrait():
    """Landscape uploads become 300x400 JPEGs."""
    # Act
    data = process_photo(io.BytesIO(_image_bytes((800, 600))))
    # Assert
    image = Image.open(io.BytesIO(data))
    assert image.format == "JPEG"
    assert image.size == (300, 400)


def test_process_photo_with_crop_box():
    data = process_photo(io.BytesIO(_image_bytes((600, 800))), crop=(10, 20, 300, 400))
    assert Image.open(io.BytesIO(data)).size == (300, 400)


def test_process_photo_rejects_garbage():
    with pytest.raises(PhotoError):
        process_photo(io.BytesIO(b"not an image"))


def test_photo_upload_updates_own_record(student_client, student):
    # Arrange
    upload = SimpleUploadedFile("eu.png", _image_bytes(), content_type="image/png")
    # Act
    response = student_client.post(reverse("members:photo_upload"), {"photo": upload})
    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["path"].startswith("photos/photo-")
    assert body["url"].startswith("/media/photos/")
    student.refresh_from_db()
    assert student.photo.name == body["path"]


def test_photo_upload_rejects_crop_outside_image(student_client, student):
    """A crop box past the image edge is a client error, not a crash."""
    # Arrange
    upload = SimpleUploadedFile("eu.png", _image_bytes((100, 100)), content_type="image/png")
    crop = {"crop_x": 500, "crop_y": 0, "crop_width": 50, "crop_height": 50}
    # Act
    response = student_client.post(reverse("members:photo_upload"), {"photo": upload, **crop})
    # Assert
    assert response.status_code == 400
    assert response.json()["error"] == "Área de recorte inválida"
    student.refresh_from_db()
    assert not student.photo


def test_photo_upload_requires_image(student_client):
    upload = SimpleUploadedFile("eu.txt", b"hello", content_type="text/plain")
    response = student_client.post(reverse("members:photo_upload"), {"photo": upload})
    assert response.status_code == 400
    assert "error" in response.json()


def test_temple_create_normalizes_fields(admin_client):
    # Act
    response = admin_client.post(
        reverse("members:temple_add"),
        {
            "name": "Templo de Campinas",
            "city": "Campinas",
            "abbreviation": " cp ",
            "is_active": "on",
            "founders_text": "Ana, Bruno , ",
        },
    )
    # Assert
    assert response.status_code == 302
    temple = Temple.objects.get()
    assert temple.abbreviation == "CP"
    assert temple.founders == ["Ana", "Bruno"]


@pytest.mark.django_db
def test_update_activity_status_marks_stale_students(make_student):
    """Students idle for over three months become inactive."""
    # Arrange
    today = datetime.date.today()
    stale = make_student("Carla Dias", last_activity=today - datetime.timedelta(days=120))
    recent = make_student("Bruno Reis", last_activity=today - datetime.timedelta(days=10))
    out = io.StringIO()
    # Act
    call_command("update_activity_status", stdout=out)
    # Assert
    stale.refresh_from_db()
    recent.refresh_from_db()
    assert not stale.is_active
    assert stale.activity_status == Student.ACTIVITY_INACTIVE
    assert stale.inactive_since is not None
    assert recent.is_active
    assert "1 students marked inactive" in out.getvalue()


@pytest.mark.django_db
def test_update_activity_status_dry_run(make_student):
    stale = make_student(
        "Carla Dias", last_activity=datetime.date.today() - datetime.timedelta(days=120)
    )
    call_command("update_activity_status", "--dry-run", stdout=io.StringIO())
    stale.refresh_from_db()
    assert stale.is_active
