"""Streamlit entry point for the carbon-offset calculator.

This script sets up logging and the session state, provides a preset
gallery and displays a landing page.  The inputs and outputs are
implemented in separate files under the `pages/` directory.
"""

import streamlit as st

from carbon_core.config import configure_logging, list_presets, load_preset
from carbon_core.params import CalculatorInputs

st.set_page_config(page_title="Carbon Offset Calculator", layout="wide")


def main() -> None:
    configure_logging()

    # --- SESSION SETUP -----------------------------------------------------
    if "inputs" not in st.session_state:
        st.session_state.inputs = CalculatorInputs()

    # --- SIDEBAR: PRESETS --------------------------------------------------
    st.sidebar.header("Load Preset")
    preset_choice = st.sidebar.selectbox("Preset", ["Default"] + list_presets())
    if st.sidebar.button("Apply preset"):
        if preset_choice == "Default":
            st.session_state.inputs = CalculatorInputs()
        else:
            st.session_state.inputs = load_preset(preset_choice)
        st.session_state.pop("result", None)
        st.sidebar.success(f"Loaded '{preset_choice}'. Open the Carbon Calculator page to review it.")

    st.sidebar.markdown(
        """
        **Next step:**
        Go to **Carbon Calculator** (page menu) to configure species,
        planting schedule and mortality, then run a projection.
        """
    )

    # --- MAIN PAGE ---------------------------------------------------------
    st.title("Carbon Offset Calculator")

    st.markdown(
        """
        Project the **CO₂e sequestered by a tree-planting project** over its
        crediting period.

        The model follows each **planting cohort** (trees of one species
        planted in one year) as it ages:

        1. Trees per cohort = planted area × species share × planting density
        2. Surviving trees decline with the annual **mortality rate**
        3. Diameter (DBH) grows linearly from the initial diameter
        4. Biomass per tree comes from a regional **allometric equation**
           or your own equation in `D`
        5. CO₂e (t) = Biomass (kg) × 0.47 × 44/12 ÷ 1000
        """
    )

    with st.expander("Default allometric equations"):
        st.markdown(
            """
            - Dry: `exp(-1.996 + 2.32 · ln(D))`
            - Moist: `exp(-2.134 + 2.530 · ln(D))`
            - Custom equations may use numbers, `+ - * /`, parentheses, `D` and
              `exp`, `ln`, `sqrt`, `pow(a,b)`, `min(a,b)`, `max(a,b)`.
              Invalid equations silently fall back to the regional default.
            """
        )

    st.info(
        "Projections are indicative. They do not replace a methodology-compliant "
        "baseline, leakage and permanence assessment."
    )


if __name__ == "__main__":
    main()
