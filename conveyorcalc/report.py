"""
Result tables and the PDF datasheet.
"""
from datetime import datetime
from typing import Dict, Optional

import pandas as pd
from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import ConveyorInput, ConveyorResult
from .projects import ProjectInfo

_COLUMNS = ["Parameter", "Value", "Unit"]


def _table(rows) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=_COLUMNS)


def result_tables(inp: ConveyorInput, result: ConveyorResult) -> Dict[str, pd.DataFrame]:
    """One DataFrame per report section, keyed by section title."""
    cap, pwr, ten, pul, geo = result.capacity, result.power, result.tension, result.pulley, result.geometry
    return {
        "Design Parameters": _table([
            ["Drive Configuration", inp.drive_config.value, "-"],
            ["Conveyor Direction", inp.conveyor_direction.value, "-"],
            ["Material", inp.material_name, "-"],
            ["Material Density", inp.material_density, "kg/m³"],
            ["Design Capacity", inp.design_capacity, "t/h"],
            ["Belt Speed", inp.belt_speed, "m/s"],
            ["Belt Width", inp.belt_width, "mm"],
            ["Horizontal Length", inp.horizontal_length, "m"],
            ["Lift Height", inp.lift_height, "m"],
            ["Conveyor Length", geo.conveyor_length, "m"],
            ["Incline Angle", geo.angle_deg, "deg"],
            ["Trough Angle", inp.trough_angle, "deg"],
            ["Wrap Angle", inp.wrap_angle, "deg"],
        ]),
        "Capacity": _table([
            ["Cross-Section Area", cap.cross_section_area, "m²"],
            ["Volumetric Capacity", cap.volumetric, "m³/h"],
            ["Mass Capacity", cap.mass, "t/h"],
            ["Status", cap.status, "-"],
        ]),
        "Power": _table([
            ["Idler Friction", pwr.f_idlers, "N"],
            ["Lift Force", pwr.f_lift, "N"],
            ["Skirtboard", pwr.f_skirt, "N"],
            ["Hopper Pull-out", pwr.f_hopper, "N"],
            ["Cleaners", pwr.f_cleaners, "N"],
            ["Belt Bending", pwr.f_bending, "N"],
            ["Effective Tension (Te)", pwr.effective_tension, "N"],
            ["Power - Horizontal", pwr.p_horizontal, "kW"],
            ["Power - Lift", pwr.p_lift, "kW"],
            ["Power - Accessories", pwr.p_accessories, "kW"],
            ["Shaft Power", pwr.p_total_shaft, "kW"],
            ["Installed Motor Power", pwr.p_motor_installed, "kW"],
        ]),
        "Tension": _table([
            ["T1 (Tight Side)", ten.t1, "N"],
            ["T2 (Slack Side)", ten.t2, "N"],
            ["T3", ten.t3, "N"],
            ["T4", ten.t4, "N"],
            ["Tail Tension", ten.t_tail, "N"],
            ["Max Tension", ten.t_max, "N"],
            ["Min Tension (Sag)", ten.min_tension_sag, "N"],
            ["Min Tension (Slip)", ten.min_tension_drive, "N"],
        ]),
        "Pulley": _table([
            ["Drive Pulley Diameter", pul.diameter, "mm"],
            ["Face Width", pul.face_width, "mm"],
            ["Shaft Torque", pul.shaft_torque, "N·m"],
            ["Resultant Load", pul.resultant_load, "N"],
        ]),
    }


def _fmt(value) -> str:
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)


class EngineeringReport(FPDF):
    def __init__(self, info: Optional[ProjectInfo] = None):
        super().__init__()
        self.info = info or ProjectInfo()

    def header(self):
        self.set_font('Helvetica', 'B', 14)
        self.cell(0, 10, 'BELT CONVEYOR CALCULATION REPORT (CEMA)', border=0,
                  new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
        self.set_font('Helvetica', 'I', 10)
        sub = f'Generated on: {datetime.now().strftime("%Y-%m-%d %H:%M")}'
        if self.info.project_name:
            sub = f'Project: {self.info.project_name} | Client: {self.info.client_name} | {sub}'
        self.cell(0, 10, sub, border=0, new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='C')
        self.line(10, 30, 200, 30)
        self.ln(10)

    def footer(self):
        self.set_y(-15)
        self.set_font('Helvetica', 'I', 8)
        self.cell(0, 10, f'Page {self.page_no()}', border=0, align='C')

    def section_title(self, title):
        self.set_font('Helvetica', 'B', 12)
        self.set_fill_color(230, 230, 230)
        self.cell(0, 10, title, border=0, new_x=XPos.LMARGIN, new_y=YPos.NEXT, align='L', fill=True)
        self.ln(2)

    def data_row(self, label, value, unit=""):
        self.set_font('Helvetica', '', 10)
        self.cell(90, 8, label, border=1)
        self.cell(60, 8, value, border=1)
        self.cell(0, 8, unit, border=1, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def create_pdf(inp: ConveyorInput, result: ConveyorResult, info: Optional[ProjectInfo] = None) -> bytes:
    pdf = EngineeringReport(info)
    pdf.add_page()
    for i, (title, df) in enumerate(result_tables(inp, result).items(), start=1):
        if i > 1:
            pdf.ln(5)
        pdf.section_title(f"{i}. {title.upper()}")
        for row in df.itertuples(index=False):
            pdf.data_row(row.Parameter, _fmt(row.Value), row.Unit)
    return bytes(pdf.output())
