"""Prescription data models"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


class Medicine(BaseModel):
    """Medicine record as held by the remote store"""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: Optional[str] = Field(None, description="Remote medicine identifier")
    name: str = Field(..., min_length=1, description="Medicine name")
    dosage: str = Field("", description="Default dosage (e.g., '500 mg')")
    frequency: str = Field("", description="How often to take (e.g., 'Twice daily')")
    duration: str = Field("", description="How long to take (e.g., '7 days')")
    side_effects: str = Field("", description="Common side effects")
    guide_text: Optional[str] = Field(None, description="Patient guide text")
    is_placeholder: bool = Field(False, description="True when synthesized after a failed lookup")


class MedicineLine(BaseModel):
    """One medicine entry of a prescription"""
    medicine_id: str = Field(..., description="Remote medicine identifier")
    custom_dosage: Optional[str] = Field(None, description="Dosage overriding the medicine default")
    custom_instructions: Optional[str] = Field(None, description="Doctor's instructions for this line")
    medicine: Optional[Medicine] = Field(None, description="Resolved medicine, set after resolution")


class Prescription(BaseModel):
    """Prescription record fetched from the remote store"""
    id: str = Field(..., min_length=1)
    code: str
    patient_name: str = ""
    patient_contact: str = ""
    created_at: int = Field(0, description="Creation timestamp")
    accessed_at: Optional[int] = Field(None, description="Last access timestamp")
    notes: str = Field("", description="Additional notes from the doctor")
    medicines: List[MedicineLine] = Field(default_factory=list)


class AccessedPrescription(BaseModel):
    """Result of a prescription access, resolved or rehydrated"""
    prescription: Prescription
    medicine_lines: List[MedicineLine] = Field(default_factory=list)
    degraded_count: int = Field(0, description="Lines resolved through a placeholder medicine")


class MedicineSummary(BaseModel):
    """Compact medicine summary stored in history"""
    model_config = ConfigDict(frozen=True)

    name: str
    dosage: str = "N/A"
    instructions: str = ""


class HistoryEntry(BaseModel):
    """Denormalized snapshot of an accessed prescription"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    code: str = ""
    patient_name: str = ""
    created_at: int = 0
    accessed_at: int = Field(..., description="Access time in epoch milliseconds")
    medicines_count: int = Field(..., ge=0)
    doctor_notes: str = ""
    medicines: List[MedicineSummary] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_count(self) -> "HistoryEntry":
        if self.medicines_count != len(self.medicines):
            raise ValueError(
                f"medicines_count ({self.medicines_count}) does not match "
                f"{len(self.medicines)} summarized medicines"
            )
        return self
