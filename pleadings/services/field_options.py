"""
Option sets for choice fields embedded in filing templates.

Exporters never reach for this table on their own: callers pass a
mapping of ``field_type -> FieldOptionSet`` into every export call.
``DEFAULT_OPTION_SETS`` is the Indiana criminal-practice table used by
the CLI.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Optional


@dataclass(frozen=True)
class FieldOption:
    value: str
    label: str


@dataclass(frozen=True)
class FieldOptionSet:
    id: str
    label: str
    options: tuple[FieldOption, ...]

    def label_for(self, value: str) -> Optional[str]:
        for option in self.options:
            if option.value == value:
                return option.label
        return None


def _set(set_id: str, label: str, *options: tuple[str, str]) -> FieldOptionSet:
    return FieldOptionSet(
        id=set_id,
        label=label,
        options=tuple(FieldOption(value=v, label=l) for v, l in options),
    )


FIELD_OPTION_SETS: tuple[FieldOptionSet, ...] = (
    _set(
        "offense-level", "Offense Level",
        ("murder", "Murder"),
        ("level-1-felony", "Level 1 Felony"),
        ("level-2-felony", "Level 2 Felony"),
        ("level-3-felony", "Level 3 Felony"),
        ("level-4-felony", "Level 4 Felony"),
        ("level-5-felony", "Level 5 Felony"),
        ("level-6-felony", "Level 6 Felony"),
        ("class-a-misdemeanor", "Class A Misdemeanor"),
        ("class-b-misdemeanor", "Class B Misdemeanor"),
        ("class-c-misdemeanor", "Class C Misdemeanor"),
        ("infraction", "Infraction"),
    ),
    _set(
        "suppression-basis", "Suppression Basis",
        ("4th-amendment", "Fourth Amendment — Unreasonable Search & Seizure"),
        ("5th-amendment", "Fifth Amendment — Self-Incrimination"),
        ("6th-amendment", "Sixth Amendment — Right to Counsel"),
        ("14th-amendment", "Fourteenth Amendment — Due Process"),
        ("art1-sec11", "Ind. Const. Art. 1, § 11 — Search & Seizure"),
        ("miranda", "Miranda Violation"),
        ("fruit-poisonous-tree", "Fruit of the Poisonous Tree"),
        ("involuntary-statement", "Involuntary Statement"),
    ),
    _set(
        "dismissal-basis", "Dismissal Basis",
        ("failure-state-claim", "Failure to State a Claim"),
        ("lack-jurisdiction", "Lack of Subject Matter Jurisdiction"),
        ("due-process", "Due Process Violation"),
        ("speedy-trial", "Speedy Trial Violation (Crim. Rule 4)"),
        ("double-jeopardy", "Double Jeopardy"),
        ("statute-limitations", "Statute of Limitations"),
        ("prosecutorial-misconduct", "Prosecutorial Misconduct"),
        ("insufficient-evidence", "Insufficient Evidence"),
    ),
    _set(
        "evidence-rule", "Evidence Rule",
        ("rule-401", "Rule 401 — Relevance"),
        ("rule-402", "Rule 402 — Admissibility of Relevant Evidence"),
        ("rule-403", "Rule 403 — Prejudice vs. Probative Value"),
        ("rule-404a", "Rule 404(a) — Character Evidence"),
        ("rule-404b", "Rule 404(b) — Prior Bad Acts"),
        ("rule-602", "Rule 602 — Lack of Personal Knowledge"),
        ("rule-702", "Rule 702 — Expert Testimony"),
        ("rule-801", "Rule 801 — Hearsay Definition"),
        ("rule-802", "Rule 802 — Hearsay Rule"),
    ),
    _set(
        "constitutional-amendment", "Constitutional Amendment",
        ("1st", "First Amendment — Free Speech"),
        ("2nd", "Second Amendment — Right to Bear Arms"),
        ("4th", "Fourth Amendment — Search & Seizure"),
        ("5th", "Fifth Amendment — Due Process / Self-Incrimination"),
        ("6th", "Sixth Amendment — Right to Counsel / Confrontation"),
        ("8th", "Eighth Amendment — Cruel & Unusual Punishment"),
        ("14th", "Fourteenth Amendment — Equal Protection / Due Process"),
    ),
    _set(
        "hearing-type", "Hearing Type",
        ("initial", "Initial Hearing"),
        ("omnibus", "Omnibus Hearing"),
        ("pretrial", "Pre-Trial Conference"),
        ("suppression", "Suppression Hearing"),
        ("change-of-plea", "Change of Plea Hearing"),
        ("sentencing", "Sentencing Hearing"),
        ("bench-trial", "Bench Trial"),
        ("jury-trial", "Jury Trial"),
    ),
    _set(
        "expert-type", "Expert Type",
        ("forensic-psychologist", "Forensic Psychologist"),
        ("forensic-pathologist", "Forensic Pathologist"),
        ("toxicologist", "Toxicologist"),
        ("dna-analyst", "DNA Analyst"),
        ("digital-forensics", "Digital Forensics Expert"),
        ("accident-reconstruction", "Accident Reconstruction Expert"),
        ("ballistics", "Ballistics Expert"),
        ("medical", "Medical Expert"),
    ),
)


def index_option_sets(option_sets: Iterable[FieldOptionSet]) -> Mapping[str, FieldOptionSet]:
    """Read-only ``id -> set`` mapping."""
    return MappingProxyType({s.id: s for s in option_sets})


DEFAULT_OPTION_SETS: Mapping[str, FieldOptionSet] = index_option_sets(FIELD_OPTION_SETS)
