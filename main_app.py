import math
import logging
from dataclasses import replace

import streamlit as st
import pandas as pd
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon, Circle

from conveyorcalc import (
    ConveyorDirection, ConveyorInput, DriveConfig, calculate_checked, load_constants,
)
from conveyorcalc.form import (
    condition_choices, default_density, project_choices, slope_angle_deg, trough_choices, width_choices,
)
from conveyorcalc.logging_config import setup_logging
from conveyorcalc.materials import MATERIAL_DATABASE, apply_material, get_material_by_name, material_names
from conveyorcalc.projects import ProjectInfo, ProjectStore
from conveyorcalc.report import create_pdf, result_tables

# --- 1. KONFIGURASI SYSTEM & STYLE ---
st.set_page_config(
    page_title="ConveyorCalc - CEMA",
    page_icon="🏭",
    layout="wide",
    initial_sidebar_state="expanded"
)
logger = setup_logging(logging.INFO)

# CSS Premium Dashboard
st.markdown("""
<style>
    .main-header {font-size: 36px; font-weight: 900; color: #FDB913; text-shadow: 1px 1px #00563F; margin-bottom: 5px;}
    .sub-header {font-size: 16px; color: #00563F; font-weight: bold; font-style: italic; margin-bottom: 25px;}
    .status-safe {background-color: #d1e7dd; color: #0f5132; padding: 15px; border-radius: 8px; border-left: 8px solid #198754;}
    .status-danger {background-color: #f8d7da; color: #721c24; padding: 15px; border-radius: 8px; border-left: 8px solid #dc3545;}
    .kpi-card {background: white; padding: 20px; border-radius: 8px; box-shadow: 0 2px 6px rgba(0,0,0,0.15); border-top: 4px solid #FDB913;}
    .kpi-val {font-size: 26px; font-weight: 800; color: #2c3e50;}
    .kpi-lbl {font-size: 12px; text-transform: uppercase; color: #7f8c8d; letter-spacing: 1px;}
    .stTabs [data-baseweb="tab-list"] {gap: 10px;}
    .stTabs [data-baseweb="tab"] {height: 50px; white-space: pre-wrap; border-radius: 4px 4px 0 0; font-weight: 600;}
    .theory-box {background-color: #f8f9fa; padding: 20px; border-radius: 5px; border-left: 4px solid #00563F; margin-bottom: 15px;}
</style>
""", unsafe_allow_html=True)

constants = load_constants()
store = ProjectStore()

# --- 2. SIDEBAR & INPUT ---
st.sidebar.title("ConveyorCalc")
loaded = st.session_state.get('loaded_input', ConveyorInput())

with st.sidebar.expander("📁 Project", expanded=False):
    info = ProjectInfo(
        project_name=st.text_input("Project Name", st.session_state.get('project_name', "")),
        client_name=st.text_input("Client Name"),
        project_number=st.text_input("Project Number"),
        date=str(st.date_input("Date")),
        engineer=st.text_input("Engineer"),
    )
    saved = store.all()
    if saved:
        labels = project_choices(saved)
        pick = st.selectbox("Open saved project", [None] + list(labels),
                            format_func=lambda pid: "-" if pid is None else labels[pid])
        if pick is not None and st.button("Load"):
            project = next(p for p in saved if p.id == pick)
            st.session_state['loaded_input'] = project.conveyor_input
            st.session_state['project_name'] = project.name
            st.rerun()

st.sidebar.markdown("### 1. Design Targets")
drive = st.sidebar.selectbox("Type of Drive", list(DriveConfig), index=list(DriveConfig).index(loaded.drive_config))
direction = st.sidebar.selectbox("Conveyor Direction", list(ConveyorDirection), index=list(ConveyorDirection).index(loaded.conveyor_direction))
cap = st.sidebar.number_input("Design Capacity (t/h)", 0.0, 20000.0, float(loaded.design_capacity), help="Target throughput.")
speed = st.sidebar.number_input("Belt Speed (m/s)", 0.0, 10.0, float(loaded.belt_speed), 0.1)
wrap = st.sidebar.number_input("Wrap Angle (deg)", 0.0, 360.0, float(loaded.wrap_angle), 5.0)

st.sidebar.markdown("### 2. Material")
names = material_names() + ["Custom"]
sel_mat = st.sidebar.selectbox("Material", names, index=names.index(loaded.material_name) if loaded.material_name in names else len(names) - 1)
mat_data = get_material_by_name(sel_mat)
if mat_data:
    st.sidebar.info(f"📋 **{mat_data.abrasiveness}** · {mat_data.density_min:.0f}-{mat_data.density_max:.0f} kg/m³ {mat_data.description}")
density = st.sidebar.number_input("Bulk Density (kg/m³)", 0.0, 5000.0, default_density(loaded, mat_data))
lump = st.sidebar.number_input("Max Lump Size (mm)", 0.0, 500.0, float(loaded.lump_size))
conditions, condition_idx = condition_choices(loaded)
condition = st.sidebar.selectbox("Condition", conditions, index=condition_idx)

st.sidebar.markdown("### 3. Geometry")
length = st.sidebar.number_input("Horizontal Length (m)", 0.0, 10000.0, float(loaded.horizontal_length))
use_slope = st.sidebar.checkbox("Enter slope angle instead of lift")
if use_slope:
    slope = st.sidebar.number_input("Slope Angle (deg)", -30.0, 30.0, min(max(slope_angle_deg(loaded), -30.0), 30.0))
    lift = length * math.tan(math.radians(slope))
    st.sidebar.caption(f"Lift = {lift:.2f} m")
else:
    lift = st.sidebar.number_input("Lift Height (m)", -500.0, 500.0, float(loaded.lift_height), help="Negative for decline.")
carrier_pitch = st.sidebar.number_input("Carrier Idler Pitch (m)", 0.1, 5.0, float(loaded.carrier_pitch))
return_pitch = st.sidebar.number_input("Return Idler Pitch (m)", 0.1, 10.0, float(loaded.return_pitch))
troughs, trough_idx = trough_choices(loaded)
trough = st.sidebar.radio("Idler Trough Angle", troughs, index=trough_idx, horizontal=True)

with st.sidebar.expander("4. Belt & Components", expanded=False):
    widths, width_idx = width_choices(loaded)
    sel_w = st.selectbox("Belt Width (mm)", widths, index=width_idx)
    belt_mass = st.number_input("Belt Mass (kg/m)", 0.0, 200.0, float(loaded.belt_mass))
    idler_mass = st.number_input("Carry Idler Mass (kg/m)", 0.0, 200.0, float(loaded.idler_mass))
    ret_idler = st.number_input("Return Idler Mass (kg/m, 0 = auto)", 0.0, 200.0, float(loaded.return_idler_mass or 0.0))
    sag = st.number_input("Belt Sag (%)", 0.5, 5.0, float(loaded.belt_sag), 0.5)
    friction = st.number_input("Idler Friction f", 0.005, 0.1, float(loaded.friction_idlers), 0.005, format="%.3f")
    eff = st.number_input("Drive Efficiency", 0.5, 1.0, float(loaded.drive_efficiency), 0.01)

with st.sidebar.expander("5. Accessories", expanded=False):
    hopper_h = st.number_input("Hopper Height (m)", 0.0, 10.0, float(loaded.hopper_height))
    skirt_len = st.number_input("Skirtboard Length (m)", 0.0, 50.0, float(loaded.skirt_length))
    scrapers = st.number_input("Scrapers", 0, 10, int(loaded.scraper_count))
    ploughs = st.number_input("Ploughs", 0, 10, int(loaded.plough_count))
    trippers = st.number_input("Trippers", 0, 5, int(loaded.tripper_count))

inp = ConveyorInput(
    drive_config=drive, conveyor_direction=direction, design_capacity=cap, belt_speed=speed, wrap_angle=wrap,
    material_name=sel_mat if mat_data else loaded.material_name, material_condition=condition, lump_size=lump,
    surcharge_angle=loaded.surcharge_angle, repose_angle=loaded.repose_angle,
    horizontal_length=length, lift_height=lift, carrier_pitch=carrier_pitch, return_pitch=return_pitch,
    trough_angle=trough, belt_width=sel_w, belt_mass=belt_mass, idler_mass=idler_mass,
    return_idler_mass=ret_idler or None, belt_sag=sag, friction_idlers=friction, drive_efficiency=eff,
    hopper_height=hopper_h, skirt_length=skirt_len, scraper_count=scrapers, plough_count=ploughs,
    tripper_count=trippers,
)
if mat_data and mat_data.name != loaded.material_name:
    inp = apply_material(inp, mat_data)
inp = replace(inp, material_density=density)

# --- EXECUTION ---
outcome = calculate_checked(inp, constants)

st.markdown("<div class='main-header'>Belt Conveyor Calculation</div>", unsafe_allow_html=True)
st.markdown("<div class='sub-header'>CEMA Analytical Method | Capacity · Power · Tension · Pulley</div>", unsafe_allow_html=True)

if not outcome.success:
    st.markdown(f"<div class='status-danger'><h3>⛔ INVALID INPUT</h3><p>{outcome.error}</p></div>", unsafe_allow_html=True)
    st.stop()

res = outcome.result
cap_r, pwr, ten, pul = res.capacity, res.power, res.tension, res.pulley

# STATUS CHECK
if cap_r.ok:
    st.markdown(f"<div class='status-safe'><h3>✅ CAPACITY OK</h3><p>{cap_r.mass:.0f} t/h available ≥ {cap:.0f} t/h target.</p></div>", unsafe_allow_html=True)
else:
    st.markdown(f"<div class='status-danger'><h3>⛔ CAPACITY NOT OK</h3><p>Belt carries {cap_r.mass:.0f} t/h, target is {cap:.0f} t/h. Widen the belt or raise the speed.</p></div>", unsafe_allow_html=True)

st.write("")

k1, k2, k3, k4, k5 = st.columns(5)
k1.markdown(f"<div class='kpi-card'><div class='kpi-val'>{pwr.p_motor_installed:.1f} kW</div><div class='kpi-lbl'>Installed Motor</div></div>", unsafe_allow_html=True)
k2.markdown(f"<div class='kpi-card'><div class='kpi-val'>{pwr.effective_tension/1000:.1f} kN</div><div class='kpi-lbl'>Effective Tension</div></div>", unsafe_allow_html=True)
k3.markdown(f"<div class='kpi-card'><div class='kpi-val'>{ten.t_max/1000:.1f} kN</div><div class='kpi-lbl'>Max Tension (T1)</div></div>", unsafe_allow_html=True)
k4.markdown(f"<div class='kpi-card'><div class='kpi-val'>{pul.shaft_torque/1000:.2f} kN·m</div><div class='kpi-lbl'>Shaft Torque</div></div>", unsafe_allow_html=True)
k5.markdown(f"<div class='kpi-card'><div class='kpi-val'>{pul.resultant_load/1000:.1f} kN</div><div class='kpi-lbl'>Pulley Load</div></div>", unsafe_allow_html=True)

st.write("")
tables = result_tables(inp, res)

# --- TABS ---
tabs = st.tabs(["📐 Capacity", "⚡ Power", "📈 Tension", "⚙️ Pulley", "📋 Report & Projects", "📘 Dasar Teori"])

with tabs[0]:
    c1, c2 = st.columns([3, 1])
    with c1:
        fig, ax = plt.subplots(figsize=(10, 3.5))
        W = float(sel_w)
        cr = 0.371 * W; wr = (W - cr)/2; beta = math.radians(trough)
        p_belt = [(-cr/2 - wr*math.cos(beta), wr*math.sin(beta)), (-cr/2, 0), (cr/2, 0), (cr/2 + wr*math.cos(beta), wr*math.sin(beta))]
        ax.add_patch(Polygon(p_belt, closed=False, linewidth=5, edgecolor='#2c3e50', facecolor='none'))
        xr = cr/2 + wr*math.cos(beta); yr = wr*math.sin(beta)
        yp = yr + xr * math.tan(math.radians(inp.surcharge_angle)) / 2
        xc = np.linspace(-xr, xr, 50); a = (yr - yp)/(xr**2); yc = a*xc**2 + yp
        col = '#2ecc71' if cap_r.ok else '#e74c3c'
        ax.add_patch(Polygon(list(zip(xc, yc)) + [(xr, yr), (cr/2, 0), (-cr/2, 0), (-xr, yr)], closed=True, facecolor=col, alpha=0.8))
        if lump > 0:
            ax.add_patch(Circle((0, yr/2), lump/2, color='#9b59b6', alpha=0.6, label='Max Lump'))
        ax.set_xlim(-W/1.5, W/1.5); ax.set_ylim(-50, W/1.8); ax.set_aspect('equal'); ax.axis('off')
        st.pyplot(fig)
    with c2:
        st.table(tables["Capacity"])

with tabs[1]:
    c1, c2 = st.columns([2, 1])
    with c1:
        forces = pd.Series({
            "Idlers": pwr.f_idlers, "Lift": pwr.f_lift, "Skirt": pwr.f_skirt,
            "Hopper": pwr.f_hopper, "Cleaners": pwr.f_cleaners, "Bending": pwr.f_bending,
        })
        fig, ax = plt.subplots(figsize=(8, 3.5))
        ax.barh(forces.index, forces.values / 1000, color=['#e74c3c' if v < 0 else '#2980b9' for v in forces.values])
        ax.set_xlabel("Resistance (kN)"); ax.set_title(f"Te = {pwr.effective_tension/1000:.2f} kN")
        ax.grid(True, axis='x', alpha=0.3)
        st.pyplot(fig)
    with c2:
        st.table(tables["Power"])

with tabs[2]:
    c1, c2 = st.columns([2, 1])
    with c1:
        ell = res.geometry.conveyor_length
        fig, ax = plt.subplots(figsize=(8, 3))
        ax.plot([0, ell], [ten.t_tail, ten.t1], 'r-o', linewidth=2, label='Carry strand')
        ax.plot([ell, ell/2, 0], [ten.t2, ten.t3, ten.t4], 'b--o', linewidth=2, label='Return strand')
        ax.axhline(ten.min_tension_sag, color='#7f8c8d', linestyle=':', label='Min. sag tension')
        ax.set_ylabel("Tension (N)"); ax.set_xlabel("Distance from tail (m)")
        ax.set_title("Profil Tegangan Belt"); ax.legend(loc='best')
        st.pyplot(fig)
    with c2:
        st.table(tables["Tension"])
    if ten.t2 < ten.min_tension_sag:
        st.warning(f"⚠️ T2 {ten.t2:.0f} N is below the sag-control minimum {ten.min_tension_sag:.0f} N. Increase take-up tension.")
    else:
        st.success(f"✅ Sag control satisfied ({ten.t2:.0f} N ≥ {ten.min_tension_sag:.0f} N).")

with tabs[3]:
    st.table(tables["Pulley"])
    st.info(f"Drive factor 1/(e^(μθ)−1) = {ten.drive_factor:.3f} at θ = {wrap:.0f}°, μ = {constants.drive_friction}")

with tabs[4]:
    st.markdown("### 📋 Design Parameters")
    st.table(tables["Design Parameters"])
    st.markdown("---")
    c1, c2 = st.columns(2)
    with c1:
        st.write("**Download Report:**")
        st.download_button(label="📄 Download Datasheet (PDF)", data=create_pdf(inp, res, info),
                           file_name=f"{info.project_name or 'Conveyor'}_Report.pdf", mime="application/pdf")
    with c2:
        st.write("**Project Storage:**")
        if st.button("💾 Save Project"):
            project = store.save(info, inp, res)
            st.success(f"Saved as {project.id}")

with tabs[5]:
    st.markdown("### 📘 Dasar Teori (CEMA)")
    st.markdown("<div class='theory-box'><h4>1. Kapasitas</h4><p>Luas penampang dari faktor troughing.</p></div>", unsafe_allow_html=True)
    st.latex(r"Q_v = k \cdot B^2 \cdot V \cdot 3600 \qquad Q_m = Q_v \cdot \rho / 1000")
    st.markdown("<div class='theory-box'><h4>2. Tegangan Efektif ($T_e$)</h4><p>Jumlah semua gaya hambat.</p></div>", unsafe_allow_html=True)
    st.latex(r"T_e = f \ell g (2W_b + W_i + W_{ri} + W_m)\cos\alpha + W_m g H + F_{acc} + F_b")
    st.markdown("<div class='theory-box'><h4>3. Slip Check (Euler)</h4><p>Tegangan slack minimum agar belt tidak selip.</p></div>", unsafe_allow_html=True)
    st.latex(r"T_2 \ge \frac{T_e}{e^{\mu \theta} - 1}")

st.markdown("---")
st.caption(f"ConveyorCalc | CEMA Analytical Method | {len(MATERIAL_DATABASE)} materials")
