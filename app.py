import os
import time
import altair as alt
import pandas as pd
import plotly.graph_objects as go
import plotly.subplots as sp
import streamlit as st

from biosync.config_manager import ConfigManager
from biosync.data.descriptor import QUALITY_GRADES, InvalidDescriptor
from biosync.economic.roi_analysis import CustomROICalculator
from biosync.monitoring.monitor_feed import MonitorFeed
from biosync.process.recommendation import STATUS_OPTIMAL
from biosync.utils.advisory_manager import AdvisoryManager
from biosync.utils.helpers import format_currency, format_quantity, get_timestamp, setup_logging

IMAGE_TYPES = ['png', 'jpg', 'jpeg', 'gif', 'webp']


def load_configuration():
    """Load configuration once per session, from BIOSYNC_CONFIG if set"""
    if 'config_manager' not in st.session_state:
        config_manager = ConfigManager(os.environ.get('BIOSYNC_CONFIG'))
        config_manager.load_config()
        setup_logging(level=config_manager.get_app_config().get('log_level', 'INFO'))
        st.session_state.config_manager = config_manager
        st.session_state.advisory_manager = AdvisoryManager(config_manager)
    return st.session_state.config_manager


def run_analysis(params, delay):
    """Evaluate the current simulation parameters and store the result in session state"""
    with st.spinner("Analyzing..."):
        time.sleep(delay)
        try:
            st.session_state.advisory_result = st.session_state.advisory_manager.evaluate(params)
        except InvalidDescriptor as e:
            st.session_state.advisory_result = None
            st.error(f"Invalid simulation parameters: {e}")


def render_analysis_results(descriptor):
    st.subheader("Analysis Results")
    col1, col2 = st.columns(2)
    col1.metric("Moisture Content", f"{descriptor.moisture}%")
    col2.metric("Average Size", f"{descriptor.size}mm")
    col1.metric("Quality", descriptor.quality)
    col2.metric("Energy Potential", f"{descriptor.energy} MJ/kg")


def render_roi_metrics(roi, currency):
    st.subheader("Business Impact")
    col1, col2 = st.columns(2)
    col1.metric("📈 Monthly Savings", format_currency(roi.monthly_savings, currency))
    col2.metric("🧮 Conversion Efficiency", f"{roi.efficiency}%")
    col1.metric("📈 Biofuel Revenue", format_currency(roi.biofuel_revenue, currency))
    col2.metric("🌿 CO2 Reduction", f"{format_quantity(roi.carbon_reduction)} tons")


def render_recommendation(recommendation):
    if recommendation.status == STATUS_OPTIMAL:
        st.success("✅ Processing Recommendation")
    else:
        st.warning("⚠️ Processing Recommendation")

    col1, col2 = st.columns(2)
    with col1:
        st.write("**Processing Type:**")
        st.write(recommendation.processing_type)
    with col2:
        st.write("**Expected Efficiency:**")
        st.write(recommendation.efficiency)

    st.write("**Suitable Applications:**")
    st.write(" · ".join(recommendation.suitable_for))

    if recommendation.actions:
        st.write("**Recommended Actions:**")
        st.markdown("\n".join(f"- {action}" for action in recommendation.actions))

    st.caption("Based on HPCL processing standards and biomass quality analysis")


def run_scan_tab(app_config):
    """Image upload, simulation parameters and advisory results"""
    defaults = st.session_state.advisory_manager.default_descriptor()
    delay = app_config.get('analysis_delay_seconds', 2.0)
    currency = app_config.get('currency_symbol', '₹')

    # The image is only displayed; the analysis uses the simulation parameters
    uploaded = st.file_uploader("Drag and drop an image or browse files", type=IMAGE_TYPES)
    if uploaded is not None:
        st.image(uploaded, caption="Selected biomass", width=320)

    st.subheader("⚙️ Simulation Parameters")
    col1, col2 = st.columns(2)
    with col1:
        moisture = st.slider("Moisture Content (%)", 0, 100, defaults.moisture)
        quality = st.selectbox("Quality", QUALITY_GRADES,
                               index=QUALITY_GRADES.index(defaults.quality))
    with col2:
        size = st.slider("Size (mm)", 10, 100, defaults.size)
        energy = st.slider("Energy (MJ/kg)", 800, 2000, defaults.energy)

    params = {'moisture': moisture, 'size': size, 'quality': quality, 'energy': energy}

    new_upload = uploaded is not None and st.session_state.get('last_upload') != uploaded.name
    if new_upload:
        st.session_state.last_upload = uploaded.name

    if st.button("Run Simulation", key="run_simulation_btn", use_container_width=True) or new_upload:
        run_analysis(params, delay)

    result = st.session_state.get('advisory_result')
    if result is not None:
        render_analysis_results(result.descriptor)
        render_roi_metrics(result.roi, currency)
        render_recommendation(result.recommendation)

        report = st.session_state.advisory_manager.generate_advisory_report([result])
        st.download_button(
            label="Download Results as CSV",
            data=report.to_csv(index=False).encode('utf-8'),
            file_name=f'biosync_analysis_{get_timestamp()}.csv',
            mime='text/csv',
        )

    st.info("🟢 System Status: Ready for analysis")


def monitor_chart(data: pd.DataFrame):
    fig = sp.make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(go.Scatter(x=data['time'], y=data['temperature'], name="Temperature",
                             line=dict(color="#10B981", shape="spline")), secondary_y=False)
    fig.add_trace(go.Scatter(x=data['time'], y=data['pressure'], name="Pressure",
                             line=dict(color="#6B7280", shape="spline")), secondary_y=True)
    fig.update_yaxes(title_text="Temperature (°C)", secondary_y=False)
    fig.update_yaxes(title_text="Pressure (bar)", secondary_y=True)
    fig.update_layout(height=320, margin=dict(l=20, r=20, t=20, b=20))
    return fig


def run_monitor_tab(monitoring_config):
    """Simulated real-time monitoring, refreshed on a timer"""
    refresh_seconds = monitoring_config.pop('refresh_seconds', 1.0)
    if 'monitor_feed' not in st.session_state:
        st.session_state.monitor_feed = MonitorFeed(**monitoring_config)

    st.subheader("Real-time Monitoring")

    @st.fragment(run_every=refresh_seconds)
    def live_chart():
        feed = st.session_state.monitor_feed
        feed.tick()
        st.plotly_chart(monitor_chart(feed.snapshot()), use_container_width=True)

    live_chart()

    feed = st.session_state.monitor_feed
    col1, col2 = st.columns(2)
    with col1:
        st.write("#### System Parameters")
        st.table(pd.DataFrame(list(feed.get_system_parameters().items()), columns=["Parameter", "Value"]))
    with col2:
        st.write("#### Process Status")
        st.write("🟢 System Operating Normally")
        st.caption("Last Update: Just now")
        st.caption(f"Uptime: {feed.uptime}")


def run_roi_calculator_tab(custom_config, currency):
    """Standalone ROI calculator with user supplied volume, costs and prices"""
    st.subheader("🧮 BioSync ROI Calculator")

    col1, col2 = st.columns(2)
    with col1:
        biomass_volume = st.number_input("Monthly Biomass Volume (tons)",
                                         value=float(custom_config.get('biomass_volume', 1000)), step=100.0)
        current_cost = st.number_input(f"Current Processing Cost ({currency}/ton)",
                                       value=float(custom_config.get('current_processing_cost', 100)))
        alt_cost = st.number_input(f"BioSync Processing Cost ({currency}/ton)",
                                   value=float(custom_config.get('alt_processing_cost', 60)))
    with col2:
        biofuel_price = st.number_input(f"Biofuel Price ({currency}/ton)",
                                        value=float(custom_config.get('biofuel_price', 800)))
        conversion_rate = st.number_input("Conversion Rate", min_value=0.0, max_value=1.0,
                                          value=float(custom_config.get('conversion_rate', 0.6)), format="%.2f")

    calculator = CustomROICalculator(carbon_per_ton=custom_config.get('carbon_per_ton', 2.5))
    try:
        results = calculator.calculate(biomass_volume, current_cost, alt_cost, biofuel_price, conversion_rate)
    except InvalidDescriptor as e:
        st.error(f"Invalid calculator inputs: {e}")
        return

    col1, col2 = st.columns(2)
    col1.metric("📈 Monthly Savings", format_currency(results.monthly_savings, currency))
    col2.metric("📈 Annual Savings", format_currency(results.annual_savings, currency))
    col1.metric("📈 Biofuel Revenue", format_currency(results.biofuel_revenue, currency))
    col2.metric("🌿 CO2 Reduction", f"{format_quantity(results.carbon_reduction)} tons")

    chart_data = pd.DataFrame({
        'Metric': ["Monthly Savings", "Annual Savings", "Biofuel Revenue"],
        'Amount': [results.monthly_savings, results.annual_savings, results.biofuel_revenue]
    })
    bar_chart = alt.Chart(chart_data).mark_bar().encode(
        x=alt.X('Metric', sort=None),
        y=alt.Y('Amount', title=f"Amount ({currency})"),
        color=alt.Color('Metric', legend=None, scale=alt.Scale(scheme='greens')),
        tooltip=['Metric', 'Amount']
    ).properties(height=300)
    st.altair_chart(bar_chart, use_container_width=True)


def run_biosync_app():
    """Main function of the BioSync analyzer dashboard"""
    config_manager = load_configuration()
    app_config = config_manager.get_app_config()

    tab1, tab2, tab3 = st.tabs(["📷 Scan", "📊 Monitor", "🧮 ROI Calculator"])

    with tab1:
        run_scan_tab(app_config)

    with tab2:
        run_monitor_tab(config_manager.get_monitoring_config())

    with tab3:
        run_roi_calculator_tab(config_manager.get_custom_roi_config(),
                               app_config.get('currency_symbol', '₹'))


def show_sidebar_info():
    st.sidebar.header("About this App")
    st.sidebar.write("""
    BioSync Analyzer is a demonstration advisory tool for biomass processing.
    Set the biomass parameters and run a simulation to see:

    - Projected savings, biofuel revenue and CO2 reduction
    - A processing recommendation with corrective actions
    - Suitable end uses for the batch
    """)

    st.sidebar.subheader("How to Use")
    st.sidebar.write("""
    1. Optionally upload a photo of the biomass
    2. Adjust moisture, size, quality and energy
    3. Run the simulation
    4. Review the business impact and recommendation
    5. Export your results
    """)

    st.sidebar.subheader("Methodology")
    st.sidebar.write("""
    Figures use fixed illustrative coefficients, not measurements.
    Uploaded images are displayed only and are not analyzed.
    The monitoring view shows simulated readings.
    """)

    st.sidebar.markdown("---")
    st.sidebar.markdown("© 2025 BioSync")


if __name__ == "__main__":
    # Set page config - MUST BE THE FIRST STREAMLIT COMMAND
    st.set_page_config(page_title="BioSync Analyzer", page_icon="🌿", layout="wide")

    st.title("BioSync Analyzer")
    st.write("Simulate biomass quality, estimate processing ROI and get a processing recommendation.")

    show_sidebar_info()

    run_biosync_app()
