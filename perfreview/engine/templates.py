"""Competency criteria template and potential questionnaire."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Criterion:
    id: str
    name: str
    category: str


CATEGORY_WEIGHTS: dict[str, float] = {
    "technical": 0.5,
    "behavioral": 0.3,
    "organizational": 0.2,
}

DEFAULT_TEMPLATE: tuple[Criterion, ...] = (
    Criterion("gestao-conhecimento", "Gestão do Conhecimento", "technical"),
    Criterion("orientacao-resultados", "Orientação a Resultados", "technical"),
    Criterion("pensamento-critico", "Pensamento Crítico", "technical"),
    Criterion("aderencia-processos", "Aderência aos Processos", "technical"),
    Criterion("comunicacao", "Comunicação", "behavioral"),
    Criterion("inteligencia-emocional", "Inteligência Emocional", "behavioral"),
    Criterion("colaboracao", "Colaboração", "behavioral"),
    Criterion("flexibilidade", "Flexibilidade", "behavioral"),
    Criterion("missao-compartilhada", "Meritocracia e Missão Compartilhada", "organizational"),
    Criterion("espiral-passos", "Espiral de Passos", "organizational"),
    Criterion("planejar-preciso", "Planejar é Preciso", "organizational"),
    Criterion("melhoria-continua", "Melhoria Contínua", "organizational"),
)

# Order matters: index 0 is results, 1 agility, 2 and 3 feed "relationships".
POTENTIAL_ITEMS: tuple[Criterion, ...] = (
    Criterion("pot1", "Potencial para função subsequente", "results"),
    Criterion("pot2", "Aprendizado contínuo", "agility"),
    Criterion("pot3", "Alinhamento com Código Cultural", "alignment"),
    Criterion("pot4", "Visão sistêmica", "systemic-view"),
)
