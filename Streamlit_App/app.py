"""
FilterScope - Streaming Filter Visualizer
Main Streamlit Dashboard Application

Run with: streamlit run Streamlit_App/app.py
"""

import streamlit as st
import time
import warnings
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from Filter_Bank.config import SimulationSettings
from Filter_Bank.core.base import InvalidParameterError, NyquistClampWarning
from Filter_Bank.core.registry import FilterType
from Filter_Bank.session import FilterSession
from Filter_Bank.sources.signal_generator import SignalType
from Streamlit_App.components.charts import (create_frequency_response_chart, create_noise_reduction_gauge,
                                             create_signal_chart)

TICKS_PER_FRAME = 20
FRAME_DELAY = 0.05

# Page config
st.set_page_config(
    page_title="FilterScope - Streaming Filter Visualizer",
    page_icon="◉",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Custom CSS - clean, minimal UI
st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;600;700&display=swap');

    .stApp { background: #f8fafc; }
    h1, h2, h3 { font-family: 'DM Sans', sans-serif !important; color: #0f172a !important; }

    .metric-card {
        background: #fff;
        border: 1px solid #e2e8f0;
        border-radius: 12px;
        padding: 20px;
        margin: 12px 0;
        box-shadow: 0 1px 3px rgba(0,0,0,0.05);
    }

    .metric-value { font-family: 'DM Sans', sans-serif; font-size: 2rem; font-weight: 600; }
    .trace-original { color: #2196F3 !important; }
    .trace-filtered { color: #4CAF50 !important; }
    .status-neutral { color: #334155 !important; }

    [data-testid="stSidebar"] { background: #f1f5f9; }
    [data-testid="stSidebar"] .stMarkdown { color: #334155; }
</style>
""", unsafe_allow_html=True)


def get_session() -> FilterSession:
    if 'session' not in st.session_state:
        settings = SimulationSettings.load() or SimulationSettings()
        st.session_state.session = FilterSession(settings)
        st.session_state.playing = False
    return st.session_state.session


def run_guarded(action, *args, **kwargs) -> bool:
    """Run a session change, surfacing clamps as warnings and rejections as errors."""
    ok = True
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", NyquistClampWarning)
        try:
            action(*args, **kwargs)
        except InvalidParameterError as e:
            st.error(str(e))
            ok = False
    for w in caught:
        if issubclass(w.category, NyquistClampWarning):
            st.warning(str(w.message))
    return ok


def apply_changes(session: FilterSession, **values):
    """Push changed widget values into the session."""
    changes = {k: v for k, v in values.items() if getattr(session.settings, k) != v}
    if changes:
        run_guarded(session.update_settings, **changes)


def render_sidebar(session: FilterSession):
    s = session.settings
    with st.sidebar:
        st.markdown("## ⚙️ Signal")
        signal_types = [t.value for t in SignalType]
        signal_type = st.selectbox("Waveform", signal_types, index=signal_types.index(s.signal_type))
        frequency = st.slider("Frequency (Hz)", 0.5, 50.0, float(s.frequency), 0.5)
        amplitude = st.slider("Amplitude", 0.1, 5.0, float(s.amplitude), 0.1)
        noise_level = st.slider("Noise level", 0.0, 1.0, float(s.noise_level), 0.01)
        apply_changes(session, signal_type=signal_type, frequency=frequency,
                      amplitude=amplitude, noise_level=noise_level)

        st.divider()
        st.markdown("## 🎛️ Filter")
        labels = {t.label: t for t in FilterType}
        current = FilterType.parse(s.filter_type)
        chosen = labels[st.radio("Type", list(labels), index=list(labels).index(current.label))]
        if chosen is not current and not run_guarded(session.switch_filter, chosen):
            chosen = current

        if chosen is FilterType.MOVING_AVERAGE:
            apply_changes(session, window_size=st.slider("Window size", 1, 100, int(s.window_size)))
        elif chosen in (FilterType.LOWPASS, FilterType.HIGHPASS):
            apply_changes(session, cutoff_frequency=st.number_input(
                "Cutoff (Hz)", min_value=0.1, value=float(s.cutoff_frequency), step=0.5))
        else:
            apply_changes(session,
                          process_noise=st.number_input("Process noise q", min_value=0.0,
                                                        value=float(s.process_noise), format="%.4f"),
                          measurement_noise=st.number_input("Measurement noise r", min_value=0.0,
                                                            value=float(s.measurement_noise), format="%.4f"))

        st.divider()
        c1, c2 = st.columns(2)
        with c1:
            label = "⏸️ Pause" if st.session_state.playing else "▶️ Start"
            if st.button(label, use_container_width=True):
                st.session_state.playing = not st.session_state.playing
                st.rerun()
        with c2:
            if st.button("🔄 Reset", use_container_width=True):
                st.session_state.playing = False
                session.reset()
                st.rerun()
        if st.button("💾 Save settings", use_container_width=True):
            path = session.settings.save()
            st.success(f"Saved to {path}")


def metric_card(value: str, caption: str, css_class: str):
    st.markdown(f'<div class="metric-card"><div class="metric-value {css_class}">{value}</div>'
                f'<small>{caption}</small></div>', unsafe_allow_html=True)


def main():
    session = get_session()

    # Header
    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown("# FilterScope\n*Streaming filter visualizer*")
    with col2:
        st.metric("Time", f"{session.current_time:.2f} s")

    render_sidebar(session)

    if st.session_state.playing:
        session.run(TICKS_PER_FRAME)

    col_signal, col_stats = st.columns([1.6, 1])
    stats = session.statistics

    with col_signal:
        st.markdown(f"### 📈 {session.filter_type.label}")
        if session.original_trace.count >= 2:
            st.plotly_chart(create_signal_chart(session.original_trace.get_times(),
                                                session.original_trace.get_values(),
                                                session.filtered_trace.get_values()),
                            use_container_width=True)
        else:
            st.info("Press Start to stream the signal through the filter")

        c1, c2, c3 = st.columns(3)
        with c1:
            metric_card(f"{stats.original.rms:.2f}", "Original RMS", "trace-original")
        with c2:
            metric_card(f"{stats.filtered.rms:.2f}", "Filtered RMS", "trace-filtered")
        with c3:
            metric_card(f"{stats.noise_reduction:.0f}%", "Noise reduction", "status-neutral")

    with col_stats:
        st.markdown("### 📊 Analysis")
        st.plotly_chart(create_noise_reduction_gauge(stats.noise_reduction), use_container_width=True)
        if hasattr(session.filter, 'get_frequency_response'):
            st.plotly_chart(create_frequency_response_chart(session.filter, session.settings.sample_rate),
                            use_container_width=True)
        with st.expander("Filter info"):
            st.json(session.filter_info)

    st.markdown("---")
    st.markdown('<div style="text-align:center;color:#94a3b8;font-size:0.8rem;">FilterScope • '
                'causal filters, one sample at a time</div>', unsafe_allow_html=True)

    if st.session_state.playing:
        time.sleep(FRAME_DELAY)
        st.rerun()


if __name__ == "__main__":
    main()
