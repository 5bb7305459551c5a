"""Shared models for OmniSuggest."""

from omnisuggest.models.model_code_pattern import ModelCodePattern
from omnisuggest.models.model_ledger_client_config import ModelLedgerClientConfig
from omnisuggest.models.model_ledger_receipt import ModelLedgerReceipt

__all__ = ["ModelCodePattern", "ModelLedgerClientConfig", "ModelLedgerReceipt"]
