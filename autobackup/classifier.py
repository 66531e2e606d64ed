from dataclasses import dataclass
from datetime import datetime, timedelta

from .models import Age, FileRecord

class AgeClassifier:
    """Old files are strictly before the cutoff; the cutoff itself is recent."""

    @staticmethod
    def classify(created_at: datetime, cutoff: datetime) -> Age:
        return Age.RECENT if created_at >= cutoff else Age.OLD


@dataclass(frozen=True)
class CutoffPolicy:
    retention_days: int
    now: datetime

    @property
    def cutoff(self) -> datetime:
        return self.now - timedelta(days=self.retention_days)

    def classify(self, rec: FileRecord) -> Age:
        return AgeClassifier.classify(rec.created_at, self.cutoff)
