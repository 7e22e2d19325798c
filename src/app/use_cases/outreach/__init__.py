"""Use cases do outreach (cadastro, envio, status, clique, pesquisa)."""

from .bulk_send import BulkSendFilter, BulkSendReport, BulkSendUseCase
from .create_citizen import CreateCitizenUseCase
from .mark_as_sent import MarkAsSentUseCase
from .process_status_callback import ProcessStatusCallbackUseCase
from .record_click import RecordClickUseCase
from .send_outreach import SendOutreachUseCase
from .submit_survey import SubmitSurveyUseCase

__all__ = [
    "BulkSendFilter",
    "BulkSendReport",
    "BulkSendUseCase",
    "CreateCitizenUseCase",
    "MarkAsSentUseCase",
    "ProcessStatusCallbackUseCase",
    "RecordClickUseCase",
    "SendOutreachUseCase",
    "SubmitSurveyUseCase",
]
