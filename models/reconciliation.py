"""
ITC reconciliation models
"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class DiscrepancyReason(str, Enum):
    EXCESS_CLAIMED = "excess_claimed"
    UNCLAIMED = "unclaimed"
    RECONCILED = "reconciled"

    # Portal-specific reasons set by the caller, never by the classifier
    GST_REJECTED = "gst_rejected"
    PENDING_ACCEPTANCE = "pending_acceptance"
    AWAITING_GSTR2B = "awaiting_gstr2b"


class DiscrepancyClassification(BaseModel):
    """Claimed vs portal-available ITC comparison"""
    discrepancy: float
    discrepancy_percentage: Optional[float] = None
    reason: DiscrepancyReason
    has_discrepancy: bool = False
