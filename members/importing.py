"""Bulk import of students from CSV files or Google Sheets.

The admin uploads a file (or pastes a sheet URL), maps each student field to
a column header, previews the mapped rows and commits them.
"""
import logging
import re
import unicodedata
from dataclasses import dataclass, field

import requests
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from .helpers import parse_date
from .models import Student

logger = logging.getLogger(__name__)

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets/{sheet_id}/values/{range}"
SHEETS_TIMEOUT = 20

# Student field -> label shown on the mapping form
IMPORT_FIELDS = {
    "full_name": "Nome Completo",
    "email": "Email",
    "phone": "Telefone",
    "birth_date": "Data de Nascimento",
    "cpf": "CPF",
    "rg": "RG",
    "religion": "Religião",
    "unit": "Unidade/Templo",
    "street": "Rua",
    "number": "Número",
    "complement": "Complemento",
    "neighborhood": "Bairro",
    "zip_code": "CEP",
    "city": "Cidade",
    "state": "Estado",
    "turma": "Turma/Grupo",
    "is_founder": "Fundador",
    "is_admin": "Administrador",
    "is_active": "Ativo",
    "development_start_date": "Data Início Desenvolvimento",
    "internship_start_date": "Data Início Estágio",
    "magist_initiation_date": "Data Iniciação Mago",
    "not_entry_date": "Data Entrada N.O.T.",
    "master_magus_initiation_date": "Data Iniciação Mestre Mago",
}

BOOLEAN_FIELDS = {"is_founder", "is_admin", "is_active"}
DATE_FIELDS = {
    "birth_date",
    "development_start_date",
    "internship_start_date",
    "magist_initiation_date",
    "not_entry_date",
    "master_magus_initiation_date",
}
TRUTHY = {"sim", "yes", "true", "1"}

# header keyword -> field, first match wins
AUTO_MAP_KEYWORDS = [
    (("nome", "name"), "full_name"),
    (("email", "e-mail"), "email"),
    (("telefone", "phone", "celular"), "phone"),
    (("nascimento", "birth"), "birth_date"),
    (("cpf",), "cpf"),
    (("rg",), "rg"),
    (("religião", "religiao", "religion"), "religion"),
    (("unidade", "templo", "unit"), "unit"),
    (("rua", "street", "endereço"), "street"),
    (("número", "numero", "number"), "number"),
    (("complemento", "complement"), "complement"),
    (("bairro", "neighborhood"), "neighborhood"),
    (("cep", "zip"), "zip_code"),
    (("cidade", "city"), "city"),
    (("estado", "state", "uf"), "state"),
    (("turma", "grupo", "class"), "turma"),
]


class MemberImportError(Exception):
    pass


@dataclass
class ImportRow:
    line: int
    data: dict = field(default_factory=dict)
    error: str = ""


@dataclass
class ImportResult:
    created: int = 0
    skipped: int = 0
    errors: list = field(default_factory=list)


def _strip_quotes(cell):
    return re.sub(r"^[\"']|[\"']$", "", cell.strip())


def parse_csv(content):
    """Split CSV text into ``(headers, rows)``.

    Each line uses ``;`` when it contains one, ``,`` otherwise.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8-sig")
    lines = [line for line in re.split(r"\r?\n", content) if line.strip()]
    if not lines:
        raise MemberImportError("O arquivo está vazio ou não possui cabeçalhos")
    table = []
    for line in lines:
        delimiter = ";" if ";" in line else ","
        table.append([_strip_quotes(cell) for cell in line.split(delimiter)])
    return table[0], table[1:]


def extract_sheet_id(url):
    match = re.search(r"/spreadsheets/d/([a-zA-Z0-9-_]+)", url or "")
    return match.group(1) if match else None


def fetch_google_sheet(url, api_key=None):
    """Read a whole sheet through the Sheets API v4 as ``(headers, rows)``."""
    sheet_id = extract_sheet_id(url)
    if not sheet_id:
        raise MemberImportError("URL da planilha inválida")
    api_key = api_key or settings.GOOGLE_API_KEY
    if not api_key:
        raise MemberImportError("Chave de API do Google Sheets inválida ou não configurada")
    endpoint = SHEETS_API_URL.format(sheet_id=sheet_id, range="A:Z")
    try:
        resp = requests.get(endpoint, params={"key": api_key}, timeout=SHEETS_TIMEOUT)
    except requests.RequestException as exc:
        logger.warning("Google Sheets request failed: %s", exc)
        raise MemberImportError(f"Erro ao carregar planilha: {exc}") from exc
    if resp.status_code != 200:
        try:
            message = resp.json().get("error", {}).get("message")
        except ValueError:
            message = None
        raise MemberImportError(
            f"Erro ao carregar planilha: {message or 'Erro ao acessar a planilha'}"
        )
    values = resp.json().get("values") or []
    if not values:
        raise MemberImportError("A planilha está vazia")
    headers = [str(h).strip() for h in values[0]]
    rows = [[str(c).strip() for c in row] for row in values[1:]]
    return headers, rows


def auto_map(headers):
    """Guess a ``field -> header`` mapping from header names."""
    mapping = {}
    for header in headers:
        lower = header.lower().strip()
        for keywords, field_name in AUTO_MAP_KEYWORDS:
            if field_name in mapping:
                continue
            if any(k in lower for k in keywords):
                mapping[field_name] = header
                break
    return mapping


def generated_email(full_name):
    name = unicodedata.normalize("NFD", full_name.lower())
    name = "".join(ch for ch in name if not unicodedata.combining(ch))
    name = re.sub(r"[^a-z0-9]+", ".", name).strip(".")
    return f"{name}@{settings.GENERATED_EMAIL_DOMAIN}"


def normalize_unit(value):
    return "BH" if (value or "").strip().upper() == "BH" else "SP"


def _convert(field_name, value):
    if field_name in BOOLEAN_FIELDS:
        return (value or "").strip().lower() in TRUTHY
    if field_name == "unit":
        return normalize_unit(value)
    if field_name in DATE_FIELDS:
        if not value:
            return None
        try:
            return parse_date(value)
        except ValueError:
            return None
    return value


def map_rows(headers, rows, mapping):
    """Apply a ``field -> header`` mapping to the raw rows.

    Empty rows are skipped. Rows without a name carry an error instead of
    data. Line numbers count the header as line 1.
    """
    if not mapping.get("full_name"):
        raise MemberImportError('O campo "Nome Completo" é obrigatório')
    index = {h: i for i, h in enumerate(headers)}
    name_col = index.get(mapping["full_name"])
    out = []
    for n, row in enumerate(rows, start=2):
        if not any((cell or "").strip() for cell in row):
            continue
        data = {}
        for field_name, column in mapping.items():
            if not column or column not in index:
                continue
            col = index[column]
            value = row[col].strip() if col < len(row) else ""
            if field_name == "email" and not value:
                name = row[name_col] if name_col is not None and name_col < len(row) else ""
                value = generated_email(name.strip()) if name.strip() else ""
            data[field_name] = _convert(field_name, value)
        if not data.get("full_name"):
            out.append(ImportRow(line=n, error=f"Linha {n}: Nome completo é obrigatório"))
            continue
        if not data.get("email"):
            data["email"] = generated_email(data["full_name"])
        out.append(ImportRow(line=n, data=data))
    return out


def commit_rows(import_rows):
    """Create students for valid rows, skipping emails already registered."""
    result = ImportResult()
    for row in import_rows:
        if row.error:
            result.errors.append(row.error)
            continue
        data = dict(row.data)
        data.pop("is_admin", None)
        email = data["email"].lower()
        if Student.objects.filter(email__iexact=email).exists():
            result.skipped += 1
            continue
        data["email"] = email
        data.setdefault("is_active", True)
        student = Student(**data)
        try:
            student.full_clean(exclude=["user"])
            with transaction.atomic():
                student.save()
        except ValidationError as exc:
            result.errors.append(f"Linha {row.line}: {'; '.join(exc.messages)}")
            continue
        except DatabaseError as exc:
            logger.warning("Import row %s failed: %s", row.line, exc)
            result.errors.append(f"Linha {row.line}: {exc}")
            continue
        result.created += 1
    logger.info(
        "Import finished: %d created, %d skipped, %d errors",
        result.created,
        result.skipped,
        len(result.errors),
    )
    return result
