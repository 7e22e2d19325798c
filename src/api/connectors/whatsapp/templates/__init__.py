"""Templates WhatsApp usados no outreach."""

from .survey import build_survey_template, extract_link_param

__all__ = [
    "build_survey_template",
    "extract_link_param",
]
