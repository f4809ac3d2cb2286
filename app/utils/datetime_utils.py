"""
Utilitários centralizados para manipulação de datas e horas.

Padrões da aplicação:
    - Timezone principal: America/Sao_Paulo (SAO_PAULO_TZ)
    - Armazenamento: DATETIME sem timezone (naive), em horário de São Paulo
    - Data vazia: ``datetime.min`` (0001-01-01T00:00:00) representa "sem data"

Uso recomendado:
    from app.utils.datetime_utils import parse_data_hora, is_data_vazia
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

# Timezone principal da aplicação
SAO_PAULO_TZ = ZoneInfo("America/Sao_Paulo")

# Valor mínimo representável, usado como "data não informada"
DATA_VAZIA = datetime.min


def to_sao_paulo(dt: datetime | None) -> datetime | None:
    """
    Converte datetime para timezone de São Paulo.

    Aceita tanto datetimes aware quanto naive. Para naive,
    assume que já está em UTC.

    Args:
        dt: Datetime a ser convertido.

    Returns:
        datetime | None: Datetime em São Paulo timezone, ou None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(SAO_PAULO_TZ)


def to_naive_sao_paulo(dt: datetime | None) -> datetime | None:
    """
    Converte datetime para naive em timezone de São Paulo.

    Útil para armazenamento após conversão de timezone.
    """
    converted = to_sao_paulo(dt)
    if converted is None:
        return None
    return converted.replace(tzinfo=None)


def is_data_vazia(dt: datetime | None) -> bool:
    """Return ``True`` when ``dt`` is missing or equals the empty-date sentinel."""
    if dt is None:
        return True
    return dt.replace(tzinfo=None) == DATA_VAZIA


def parse_data_hora(raw: str | None) -> datetime:
    """
    Converte texto ISO 8601 (data ou data/hora) em datetime naive.

    Valores com offset são convertidos para o horário de São Paulo.
    Valores ausentes resultam em ``DATA_VAZIA``.

    Args:
        raw: Texto como "2024-03-05", "2024-03-05T10:00:00" ou
            "2024-03-05T10:00:00-03:00".

    Returns:
        datetime: Data/hora naive.

    Raises:
        ValueError: Se o texto não for uma data ISO 8601 válida.
    """
    if raw is None:
        return DATA_VAZIA
    if not isinstance(raw, str):
        raise ValueError(f"Data inválida: {raw!r}")

    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)

    # Sentinel check happens before conversion; astimezone() would underflow.
    if is_data_vazia(parsed):
        return DATA_VAZIA
    if parsed.tzinfo is not None:
        try:
            return to_naive_sao_paulo(parsed)
        except OverflowError as exc:
            raise ValueError(f"Data fora do intervalo suportado: {raw!r}") from exc
    return parsed


def inicio_do_dia(dt: datetime) -> datetime:
    """Return midnight of the calendar day of ``dt``."""
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def intervalo_do_dia(dt: datetime) -> tuple[datetime, datetime | None]:
    """
    Retorna o intervalo semiaberto [00:00 do dia, 00:00 do dia seguinte).

    No último dia representável não existe dia seguinte: o fim é ``None``
    (sem limite superior).
    """
    inicio = inicio_do_dia(dt)
    try:
        fim = inicio + timedelta(days=1)
    except OverflowError:
        fim = None
    return inicio, fim


def format_data_hora(dt: datetime | None) -> str | None:
    """Format a naive datetime as ``YYYY-MM-DDTHH:MM:SS`` for JSON payloads."""
    if dt is None:
        return None
    return dt.isoformat(timespec="seconds")
