"""
Discrepancy Classifier
Compares claimed ITC with the portal-reported (GSTR-2A/2B) available ITC
"""

from typing import List

from loguru import logger

from models.reconciliation import DiscrepancyClassification, DiscrepancyReason
from utils.config import get_section


class DiscrepancyClassifier:
    """
    Classifies the nature and size of an ITC mismatch.

    Differences within the tolerance (0.01 by default) count as reconciled
    whatever their sign, absorbing floating-point noise.
    """

    def __init__(self, config: dict = None):
        self.config = config or {}
        self.thresholds = get_section(self.config, 'reconciliation')
        self.tolerance = self.thresholds['tolerance']

    def classify(self, claimed_itc: float, available_itc: float) -> DiscrepancyClassification:
        discrepancy = claimed_itc - available_itc
        discrepancy_percentage = (discrepancy / available_itc) * 100 if available_itc > 0 else None
        has_discrepancy = abs(discrepancy) > self.tolerance

        if not has_discrepancy:
            reason = DiscrepancyReason.RECONCILED
        elif discrepancy > 0:
            reason = DiscrepancyReason.EXCESS_CLAIMED
        else:
            reason = DiscrepancyReason.UNCLAIMED

        return DiscrepancyClassification(
            discrepancy=discrepancy,
            discrepancy_percentage=discrepancy_percentage,
            reason=reason,
            has_discrepancy=has_discrepancy,
        )

    def should_flag_for_review(
        self,
        claimed_itc: float,
        available_itc: float,
        pending_itc: float = 0,
        rejected_itc: float = 0,
    ) -> bool:
        """Auto-flag discrepancies for review based on thresholds"""
        discrepancy = claimed_itc - available_itc
        # Nothing on the portal at all counts as a full mismatch
        discrepancy_percentage = (discrepancy / available_itc) * 100 if available_itc > 0 else 100

        reasons = []
        if abs(discrepancy_percentage) > self.thresholds['discrepancy_percentage_threshold']:
            reasons.append(f"discrepancy {discrepancy_percentage:.2f}%")
        if abs(discrepancy) > self.thresholds['absolute_discrepancy_threshold']:
            reasons.append(f"discrepancy Rs.{discrepancy:,.2f}")
        if pending_itc > self.thresholds['pending_itc_threshold']:
            reasons.append(f"pending ITC Rs.{pending_itc:,.2f}")
        if rejected_itc > self.thresholds['rejected_itc_threshold']:
            reasons.append(f"rejected ITC Rs.{rejected_itc:,.2f}")

        if reasons:
            logger.info(f"ITC flagged for review: {', '.join(reasons)}")
            return True
        return False

    def get_recommendations(
        self,
        discrepancy: float,
        pending_itc: float = 0,
        rejected_itc: float = 0,
    ) -> List[str]:
        """Generate recommendations based on discrepancy pattern"""
        recommendations = []

        if discrepancy > self.tolerance:
            recommendations.append("Review purchase invoices to ensure all GSTs are correctly claimed")
            recommendations.append("Check if invoices have been uploaded to GST portal in time")
            recommendations.append("Verify vendor GST registration status")

        if pending_itc and pending_itc > 0:
            recommendations.append("Monitor pending ITC acceptance status on GST portal")
            recommendations.append("Follow up with vendors for missing or incorrect invoice details")

        if rejected_itc and rejected_itc > 0:
            recommendations.append("Review rejected invoices for compliance issues")
            recommendations.append("Correct invoices and resubmit if eligible")

        if not recommendations:
            recommendations.append("ITC reconciliation is complete - no action needed")

        return recommendations


_default_classifier = DiscrepancyClassifier()


def classify(claimed_itc: float, available_itc: float) -> DiscrepancyClassification:
    return _default_classifier.classify(claimed_itc, available_itc)


def should_flag_for_review(
    claimed_itc: float,
    available_itc: float,
    pending_itc: float = 0,
    rejected_itc: float = 0,
) -> bool:
    return _default_classifier.should_flag_for_review(claimed_itc, available_itc, pending_itc, rejected_itc)


def get_recommendations(discrepancy: float, pending_itc: float = 0, rejected_itc: float = 0) -> List[str]:
    return _default_classifier.get_recommendations(discrepancy, pending_itc, rejected_itc)
