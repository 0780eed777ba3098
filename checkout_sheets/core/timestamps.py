"""
Ledger timestamp codec.

Rows store their creation time as display text (``DD/MM/YYYY, HH:MM:SS``
in a fixed regional zone) and the duplicate check reads that same text back
from the spreadsheet. Formatting and parsing live together here so the two
directions cannot drift apart.
"""

from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/Sao_Paulo"


class TimestampCodec:
    """Conversão reversível datetime <-> texto da planilha"""

    def __init__(self, tz_name: str = DEFAULT_TIMEZONE):
        self.tz_name = tz_name
        self.tz = ZoneInfo(tz_name)

    def format(self, moment: datetime) -> str:
        """
        Formata um instante no padrão da planilha.

        Args:
            moment: instante; sem tzinfo é tratado como UTC

        Returns:
            texto ``DD/MM/YYYY, HH:MM:SS`` no fuso configurado
        """
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(self.tz).strftime("%d/%m/%Y, %H:%M:%S")

    def parse(self, text: Optional[str]) -> Optional[datetime]:
        """
        Inverso de format(). Aceita somente o formato exato.

        Args:
            text: célula de timestamp lida da planilha

        Returns:
            datetime com fuso, ou None se o texto não estiver no formato
        """
        if not isinstance(text, str):
            return None
        try:
            date_part, time_part = text.strip().split(", ")
            day, month, year = (int(p) for p in date_part.split("/"))
            hour, minute, second = (int(p) for p in time_part.split(":"))
            return datetime(year, month, day, hour, minute, second, tzinfo=self.tz)
        except ValueError:
            return None
