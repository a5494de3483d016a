"""
Record Schemas (Pydantic Models)
================================

Typed, immutable views of single customer rows.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DataSchemaError(ValueError):
    """Raised when a dataset does not match the expected column schema."""


class CustomerRecord(BaseModel):
    """One parsed customer row."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    customerID: Optional[str] = Field(None, description="Customer identifier")

    # Numeric fields
    SeniorCitizen: int = Field(..., ge=0, le=1, description="Senior citizen flag (0 or 1)")
    tenure: int = Field(..., ge=0, description="Months since customer joined")
    MonthlyCharges: float = Field(..., ge=0, description="Amount charged monthly")
    TotalCharges: Optional[float] = Field(None, ge=0, description="Total amount charged")

    # Categorical fields
    gender: str = Field(..., description="Customer gender")
    Partner: str
    Dependents: str
    PhoneService: str
    MultipleLines: Optional[str] = None
    InternetService: str
    OnlineSecurity: Optional[str] = None
    OnlineBackup: Optional[str] = None
    DeviceProtection: Optional[str] = None
    TechSupport: str
    StreamingTV: str
    StreamingMovies: Optional[str] = None
    Contract: str
    PaperlessBilling: str
    PaymentMethod: str

    # Label
    Churn: str = Field(..., description="Churn label (Yes or No)")

    @field_validator("Churn")
    @classmethod
    def validate_churn(cls, v):
        allowed = ["Yes", "No"]
        if v not in allowed:
            raise ValueError(f"Churn must be one of {allowed}")
        return v

    @property
    def churned(self) -> bool:
        return self.Churn == "Yes"
