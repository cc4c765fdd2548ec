"""
Seed topics and topic identifier derivation.

On-demand course ids are derived from the topic title, and that id is the
only duplicate detection mechanism, so the normalization must stay stable:
strip, case-fold, and replace each whitespace run with "-", then prefix
with "user-". "Fundos Imobiliários" and "  fundos   imobiliários" map to the
same id.
"""

import re
from dataclasses import dataclass


USER_TOPIC_PREFIX = "user-"

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SeedTopic:
    """Predefined topic generated automatically on first load."""
    id: str
    title: str


SEED_TOPICS: tuple[SeedTopic, ...] = (
    SeedTopic(id="personal-budget", title="Orçamento Pessoal"),
    SeedTopic(id="investing-basics", title="Introdução aos Investimentos"),
    SeedTopic(id="income-tax", title="Imposto de Renda Descomplicado"),
)


def normalize_topic(title: str) -> str:
    """Case-fold a topic title and collapse whitespace runs to '-'."""
    return _WHITESPACE.sub("-", title.strip().casefold())


def topic_id_for(title: str) -> str:
    """Deterministic catalog id for a user-requested topic."""
    return f"{USER_TOPIC_PREFIX}{normalize_topic(title)}"
