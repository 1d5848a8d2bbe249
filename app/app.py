"""
Tablayeso - Streamlit Materials Editor
Enter walls and ceilings segment by segment and calculate the materials to buy.
"""

import streamlit as st
from datetime import date
from pathlib import Path
import sys
import tempfile

# Add project to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tablayeso import ExportRefused
from tablayeso.catalog import PANEL_TYPES
from tablayeso.config import EstimatorConfig
from tablayeso.engine import calculate_materials
from tablayeso.models.schema import CalculationMode, ItemKind
from tablayeso.report.excel_report import default_excel_name, export_to_excel
from tablayeso.report.pdf_report import default_pdf_name, generate_pdf_report
from tablayeso.report.text_report import render_result
from tablayeso.takeoff.loader import items_from_dicts

# Page config
st.set_page_config(
    page_title="Tablayeso - Drywall Materials",
    page_icon="🧱",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS
st.markdown("""
<style>
    .main-header {
        font-size: 2rem;
        font-weight: bold;
        color: #556B2F;
        margin-bottom: 0.5rem;
    }
    .sub-header {
        font-size: 1rem;
        color: #666;
        margin-bottom: 1rem;
    }
</style>
""", unsafe_allow_html=True)


def init_session_state():
    """Initialize session state variables."""
    if 'config' not in st.session_state:
        st.session_state.config = EstimatorConfig.load()
    if 'items' not in st.session_state:
        st.session_state.items = []
    if 'next_id' not in st.session_state:
        st.session_state.next_id = 1
    if 'last_result' not in st.session_state:
        st.session_state.last_result = None


def _new_id() -> int:
    new_id = st.session_state.next_id
    st.session_state.next_id += 1
    return new_id


def invalidate_result():
    """Any edit makes the stored result stale."""
    st.session_state.last_result = None


def new_segment(kind: str) -> dict:
    segment = {"id": _new_id(), "width": 0.0}
    if kind == ItemKind.WALL.value:
        segment["height"] = 0.0
    else:
        segment["length"] = 0.0
    return segment


def add_item(kind: str):
    config = st.session_state.config
    item = {"id": _new_id(), "kind": kind, "segments": [new_segment(kind)]}
    if kind == ItemKind.WALL.value:
        item.update({
            "faces": 1,
            "face1_panel": PANEL_TYPES[0],
            "face2_panel": PANEL_TYPES[0],
            "post_spacing": config.default_post_spacing_m,
            "double_structure": False,
        })
    else:
        item.update({"panel": PANEL_TYPES[0], "plenum": config.default_plenum_m})
    st.session_state.items.append(item)
    invalidate_result()


def remove_item(item_id: int):
    st.session_state.items = [i for i in st.session_state.items if i["id"] != item_id]
    invalidate_result()


def add_segment(item: dict):
    item["segments"].append(new_segment(item["kind"]))
    invalidate_result()


def remove_segment(item: dict, segment_id: int):
    # An item keeps at least one segment
    if len(item["segments"]) <= 1:
        return
    item["segments"] = [s for s in item["segments"] if s["id"] != segment_id]
    invalidate_result()


def item_records() -> list:
    """Editor state as loader records."""
    records = []
    for item in st.session_state.items:
        record = {k: v for k, v in item.items() if k not in ("id", "segments")}
        if item["kind"] == ItemKind.WALL.value and item["faces"] != 2:
            record["face2_panel"] = None
        record["segments"] = [
            {k: v for k, v in s.items() if k != "id"} for s in item["segments"]
        ]
        records.append(record)
    return records


def render_sidebar() -> CalculationMode:
    """Render sidebar with item actions and calculation options."""
    with st.sidebar:
        st.markdown("### 🧱 Tablayeso")
        st.markdown("---")

        st.markdown("#### Add Item")
        col1, col2 = st.columns(2)
        with col1:
            st.button("+ Wall", on_click=add_item, args=(ItemKind.WALL.value,),
                      use_container_width=True)
        with col2:
            st.button("+ Ceiling", on_click=add_item, args=(ItemKind.CEILING.value,),
                      use_container_width=True)

        st.markdown("---")

        st.markdown("#### Calculation")
        best_effort = st.checkbox(
            "Best effort",
            value=False,
            help="Compute totals for valid items even when others have errors",
            on_change=invalidate_result,
        )
        mode = CalculationMode.BEST_EFFORT if best_effort else CalculationMode.STRICT

        st.markdown("---")
        st.caption(f"{len(st.session_state.items)} items")

    return mode


def _number(label: str, item: dict, field: str, key: str, **kwargs):
    item[field] = st.number_input(
        label, value=float(item[field]), key=key, on_change=invalidate_result, **kwargs
    )


def render_wall_options(item: dict):
    key = f"item_{item['id']}"
    col1, col2, col3 = st.columns(3)
    with col1:
        item["faces"] = st.selectbox(
            "Faces", [1, 2], index=[1, 2].index(item["faces"]),
            key=f"{key}_faces", on_change=invalidate_result,
        )
    with col2:
        item["face1_panel"] = st.selectbox(
            "Face 1 Panel", PANEL_TYPES, index=PANEL_TYPES.index(item["face1_panel"]),
            key=f"{key}_face1", on_change=invalidate_result,
        )
    with col3:
        if item["faces"] == 2:
            item["face2_panel"] = st.selectbox(
                "Face 2 Panel", PANEL_TYPES, index=PANEL_TYPES.index(item["face2_panel"]),
                key=f"{key}_face2", on_change=invalidate_result,
            )

    col1, col2 = st.columns(2)
    with col1:
        _number("Post spacing (m)", item, "post_spacing", f"{key}_spacing",
                min_value=0.0, step=0.05, format="%.2f")
    with col2:
        item["double_structure"] = st.checkbox(
            "Double structure", value=item["double_structure"],
            key=f"{key}_double", on_change=invalidate_result,
        )


def render_ceiling_options(item: dict):
    key = f"item_{item['id']}"
    col1, col2 = st.columns(2)
    with col1:
        item["panel"] = st.selectbox(
            "Panel Type", PANEL_TYPES, index=PANEL_TYPES.index(item["panel"]),
            key=f"{key}_panel", on_change=invalidate_result,
        )
    with col2:
        _number("Plenum (m)", item, "plenum", f"{key}_plenum",
                min_value=0.0, step=0.05, format="%.2f")


def render_segments(item: dict):
    second_field, second_label = (
        ("height", "Height (m)") if item["kind"] == ItemKind.WALL.value
        else ("length", "Length (m)")
    )

    for number, segment in enumerate(item["segments"], 1):
        key = f"seg_{segment['id']}"
        col1, col2, col3 = st.columns([3, 3, 1])
        with col1:
            _number(f"Segment {number} width (m)", segment, "width", f"{key}_w",
                    min_value=0.0, step=0.1, format="%.2f")
        with col2:
            _number(f"Segment {number} {second_label.lower()}", segment, second_field,
                    f"{key}_h", min_value=0.0, step=0.1, format="%.2f")
        with col3:
            st.button("✕", key=f"{key}_del", on_click=remove_segment,
                      args=(item, segment["id"]), disabled=len(item["segments"]) <= 1)

    st.button("+ Segment", key=f"item_{item['id']}_addseg", on_click=add_segment, args=(item,))


def render_items():
    """Render one expander per item."""
    if not st.session_state.items:
        st.info("Add a wall or ceiling from the sidebar to get started")
        return

    for number, item in enumerate(st.session_state.items, 1):
        title = f"{ItemKind(item['kind']).display_name} #{number}"

        with st.expander(f"**{title}**", expanded=True):
            if item["kind"] == ItemKind.WALL.value:
                render_wall_options(item)
            else:
                render_ceiling_options(item)

            st.markdown("##### Segments")
            render_segments(item)

            st.button("Remove item", key=f"item_{item['id']}_remove",
                      on_click=remove_item, args=(item["id"],))


def run_calculation(mode: CalculationMode):
    items = items_from_dicts(item_records(), st.session_state.config)
    st.session_state.last_result = calculate_materials(items, mode, st.session_state.config)


def render_downloads(result):
    """Download buttons, only for a successful calculation."""
    col1, col2 = st.columns(2)
    today = date.today()

    try:
        with col1:
            with tempfile.TemporaryDirectory() as tmp:
                pdf_path = generate_pdf_report(result, Path(tmp) / default_pdf_name(today), today)
                pdf_bytes = pdf_path.read_bytes()
            st.download_button(
                "Download PDF", data=pdf_bytes, file_name=default_pdf_name(today),
                mime="application/pdf", use_container_width=True,
            )
        with col2:
            st.download_button(
                "Download Excel", data=export_to_excel(result),
                file_name=default_excel_name(today),
                mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                use_container_width=True,
            )
    except ExportRefused as e:
        st.error(str(e))


def render_result_panel():
    result = st.session_state.last_result
    if result is None:
        return

    st.markdown("---")
    if result.has_errors:
        st.error(f"{len(result.errors)} errors found")
    st.markdown(render_result(result))

    if result.is_exportable:
        render_downloads(result)


def main():
    """Main application."""
    init_session_state()
    mode = render_sidebar()

    st.markdown('<div class="main-header">Drywall Materials Calculator</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-header">Walls and ceilings, segment by segment</div>',
                unsafe_allow_html=True)

    render_items()

    if st.button("Calculate Materials", type="primary"):
        run_calculation(mode)

    render_result_panel()


if __name__ == "__main__":
    main()
