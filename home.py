from __future__ import annotations

import pandas as pd
import streamlit as st

from spacity.formatters import format_currency, format_date
from spacity.services.analytics import bookings_for_branch
from spacity.services.scheduling import STATUS_LABELS, booking_rows, bookings_on, dashboard_stats
from spacity.ui import branch_picker, load_store
from spacity.utils import iso_today

st.title("🌸 SPAcity Dashboard")
st.caption("Booking, layanan, inventory dan laporan pendapatan untuk semua cabang hotel partner.")

settings, store = load_store()
snap = store.snapshot
branch = branch_picker(store)

with st.sidebar:
    st.subheader("Environment")
    st.write(f"**Data directory:** `{settings.data_dir}`")
    st.write(f"**Store file:** `{settings.store_path.name}`")

if branch is None:
    st.info("Belum ada data cabang. Import data di **🧪 Data Management** terlebih dahulu.", icon="ℹ️")
    st.stop()

today = iso_today()
st.subheader(f"{branch.name} — {format_date(today, 'long')}")
st.caption(f"Hotel partner: {branch.hotel_partner} • {branch.location}")

branch_bookings = bookings_for_branch(snap.bookings, branch.id)
stats = dashboard_stats(branch_bookings, snap.services, snap.therapists, today=today)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Booking hari ini", stats.total_bookings)
c2.metric("Pendapatan hari ini", format_currency(stats.revenue))
c3.metric("Selesai", stats.completed_bookings)
c4.metric("Terapis aktif", stats.active_therapists)

st.divider()
st.subheader("Jadwal hari ini")
rows = booking_rows(bookings_on(branch_bookings, today), snap.services, snap.therapists)
if rows:
    df = pd.DataFrame(rows).drop(columns=["id", "notes"])
    df["status"] = df["status"].map(STATUS_LABELS)
    df["price"] = df["price"].map(format_currency)
    st.dataframe(df, use_container_width=True, hide_index=True)
else:
    st.info("Belum ada booking untuk hari ini.")
