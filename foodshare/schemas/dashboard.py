"""
Pydantic schemas for dashboard views
"""
from pydantic import BaseModel, Field


class ImpactSummary(BaseModel):
    """Aggregated impact figures for the home screen"""
    active_donations: int = Field(..., description="Donations currently published")
    completed_donations: int = Field(..., description="Donations collected")
    waste_reduced: int = Field(..., description="Units saved across completed donations")
    people_benefited: int = Field(..., description="Estimated beneficiaries")
    total_fiscal_value: str = Field(..., description="Sum of fiscal values of completed donations")
