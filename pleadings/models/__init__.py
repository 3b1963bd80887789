# Data models
from pleadings.models.caption import CaptionData, Party
from pleadings.models.formatting import INDIANA_RULES, FormattingRules

__all__ = ["CaptionData", "Party", "FormattingRules", "INDIANA_RULES"]
