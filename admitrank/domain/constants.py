from typing import List

from admitrank.domain.models import Subject

# Subjects summed when a run has no configured subject list.
LEGACY_SUBJECT_KEYS = ("math", "science", "thai", "english", "social")

# Last-resort tie-break cascade, applied after the configured subjects.
# Never merged into the configured subject list.
LEGACY_TIE_BREAK_ORDER = ("science", "math", "english", "thai", "social")

MAX_SCORE_PER_SUBJECT = 100

SUBJECT_LABELS = {
    "math": "คณิตศาสตร์",
    "science": "วิทยาศาสตร์",
    "thai": "ภาษาไทย",
    "english": "ภาษาอังกฤษ",
    "social": "สังคมศึกษา",
}


def default_subjects(max_score: float = MAX_SCORE_PER_SUBJECT) -> List[Subject]:
    """The five legacy subjects, in legacy key order."""
    return [Subject(id=key, name=SUBJECT_LABELS[key], max_score=max_score) for key in LEGACY_SUBJECT_KEYS]
