"""Streamlit UI components."""
from .trace_renderer import TraceRenderer
from .charts import create_signal_chart, create_frequency_response_chart, create_noise_reduction_gauge
