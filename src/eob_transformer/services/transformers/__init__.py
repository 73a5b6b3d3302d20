"""
Per-variant claim transformers.
"""

from eob_transformer.services.transformers.base import ClaimTransformer, EOBDraft, ItemDraft
from eob_transformer.services.transformers.dme import DMETransformer
from eob_transformer.services.transformers.hospice import HospiceTransformer
from eob_transformer.services.transformers.institutional import InstitutionalClaimTransformer
from eob_transformer.services.transformers.outpatient import OutpatientTransformer

__all__ = [
    "ClaimTransformer",
    "InstitutionalClaimTransformer",
    "EOBDraft",
    "ItemDraft",
    "DMETransformer",
    "HospiceTransformer",
    "OutpatientTransformer",
]
