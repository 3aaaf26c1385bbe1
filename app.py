from __future__ import annotations

import streamlit as st

from spacity.config import configure_logging, get_settings

st.set_page_config(page_title="SPAcity", page_icon="🌸", layout="wide")

configure_logging(get_settings())

pages = [
    st.Page("home.py", title="Dashboard", icon="🏠"),
    st.Page("pages/1_📅_Scheduling.py", title="Jadwal & Booking", icon="📅"),
    st.Page("pages/2_💆_Services.py", title="Layanan", icon="💆"),
    st.Page("pages/3_📦_Inventory.py", title="Inventory", icon="📦"),
    st.Page("pages/4_🧾_Daily_Recap.py", title="Rekap Harian", icon="🧾"),
    st.Page("pages/5_💰_Income_Breakdown.py", title="Breakdown Pendapatan", icon="💰"),
    st.Page("pages/6_📊_Analytics.py", title="Analitik", icon="📊"),
    st.Page("pages/7_🧪_Data_Management.py", title="Data Management", icon="🧪"),
]

st.navigation(pages).run()
