"""Nine-box classification.

``classify`` yields the canonical B1..B9 code. Descriptive labels live in a
separate lookup keyed by that code and are never consulted by the classifier.

Grid layout (rows by performance, columns by potential)::

    performance high   B7 B8 B9
    performance mid    B4 B5 B6
    performance low    B1 B2 B3
                       low mid high  <- potential
"""

from dataclasses import dataclass

from perfreview.errors import NotFoundError, ValidationError

AXIS_MIN = 1
AXIS_MAX = 4


def band(value: float) -> int:
    if value < 2:
        return 0
    if value < 3:
        return 1
    return 2


def classify(performance: float, potential: float) -> str:
    """Map (performance, potential), each in [1, 4], to "B1".."B9"."""
    for name, value in (("performance", performance), ("potential", potential)):
        if value is None or not AXIS_MIN <= value <= AXIS_MAX:
            raise ValidationError(
                f"{name} must be within [{AXIS_MIN}, {AXIS_MAX}], got {value}", fields=[name]
            )
    return f"B{band(performance) * 3 + band(potential) + 1}"


@dataclass(frozen=True)
class NineBoxLabel:
    code: str
    title: str
    summary: str
    performance: str
    potential: str


_LEVELS = ("baixo", "médio", "alto")

_TITLES = {
    "B1": ("Insuficiente", "Risco com performance"),
    "B2": ("Questionável", "Potencial para melhorar"),
    "B3": ("Dilema", "Potencial não demonstrado"),
    "B4": ("Eficaz", "Especialista de alto valor"),
    "B5": ("Mantenedor", "Boa performance, espaço para crescer"),
    "B6": ("Forte Performance", "Potencial para mudanças"),
    "B7": ("Comprometimento", "Especialista difícil de substituir"),
    "B8": ("Alto Impacto", "Contribuição de valor"),
    "B9": ("Futuro Líder", "Potencial além da função atual"),
}

NINE_BOX_LABELS: dict[str, NineBoxLabel] = {
    code: NineBoxLabel(
        code=code,
        title=title,
        summary=summary,
        performance=_LEVELS[(int(code[1]) - 1) // 3],
        potential=_LEVELS[(int(code[1]) - 1) % 3],
    )
    for code, (title, summary) in _TITLES.items()
}


def describe(code: str) -> NineBoxLabel:
    """Presentation lookup for a classifier code."""
    try:
        return NINE_BOX_LABELS[code]
    except KeyError:
        raise NotFoundError(f"Unknown nine-box position: {code}") from None
