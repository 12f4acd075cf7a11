"""
Layout parameters.

Every dimension except `staff_space` is a multiple of the staff space (the
distance between two staff lines), so one scalar scales the whole layout.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class LayoutParams(BaseModel):
    """Engraving dimensions, in staff spaces unless noted."""

    staff_space: float = Field(8.0, gt=0, description="Staff space in output units")

    # Notes
    note_width: float = Field(1.2, ge=0, description="Notehead width")
    stem_length: float = Field(3.5, ge=0, description="Standard stem length")
    stem_width: float = Field(0.12, ge=0, description="Stem thickness")

    # Beams
    beam_spacing: float = Field(0.75, ge=0, description="Distance between beam lines")
    beam_thickness: float = Field(0.5, ge=0, description="Beam thickness")

    # Lines
    ledger_line_extension: float = Field(0.4, ge=0, description="Ledger overhang past notehead")
    ledger_line_thickness: float = Field(0.16, ge=0, description="Ledger line thickness")
    staff_line_thickness: float = Field(0.13, ge=0, description="Staff line thickness")
    barline_thickness: float = Field(0.16, ge=0, description="Default barline thickness")
    thin_barline_thickness: float = Field(0.16, ge=0, description="Thin barline thickness")
    thick_barline_thickness: float = Field(0.5, ge=0, description="Thick barline thickness")

    # Header
    clef_width: float = Field(2.8, ge=0, description="Clef glyph width")
    key_signature_gap: float = Field(0.5, ge=0, description="Gap before key signature")
    key_accidental_width: float = Field(0.7, ge=0, description="Width per key accidental")
    time_signature_gap: float = Field(0.8, ge=0, description="Gap before time signature")
    time_signature_width: float = Field(1.5, ge=0, description="Time signature glyph width")

    # Spacing
    accidental_gap: float = Field(0.3, ge=0, description="Gap between accidental and notehead")
    dot_gap: float = Field(0.25, ge=0, description="Gap between notehead and dot")
    measure_gap: float = Field(1.5, ge=0, description="Padding inside each barline")
    minimum_note_spacing: float = Field(1.8, ge=0, description="Base horizontal note spacing")

    model_config = {"frozen": True}

    def scaled(self, value: float) -> float:
        """Convert a staff-space multiple to output units."""
        return value * self.staff_space

    def with_staff_space(self, staff_space: float) -> LayoutParams:
        """Copy with a different staff space (validated)."""
        return LayoutParams(**{**self.model_dump(), "staff_space": staff_space})
