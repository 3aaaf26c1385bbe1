from __future__ import annotations

from typing import Optional

import pandas as pd
import streamlit as st

from spacity.config import Settings, get_settings
from spacity.models import Branch
from spacity.storage import get_store
from spacity.store import Store

SESSION_BRANCH = "spacity_selected_branch"


def load_store() -> tuple[Settings, Store]:
    settings = get_settings()
    return settings, get_store(settings.store_path)


def branch_picker(store: Store) -> Optional[Branch]:
    """Sidebar branch selector; the choice survives page switches."""
    branches = store.snapshot.branches
    if not branches:
        return None

    ids = [b.id for b in branches]
    current = st.session_state.get(SESSION_BRANCH)
    index = ids.index(current) if current in ids else 0

    with st.sidebar:
        branch_id = st.selectbox(
            "Cabang",
            options=ids,
            index=index,
            format_func=lambda i: store.snapshot.branch(i).name,
            key="branch_picker",
        )
    st.session_state[SESSION_BRANCH] = branch_id
    return store.snapshot.branch(branch_id)


def download_frames(frames: dict[str, pd.DataFrame], prefix: str) -> None:
    for name, df in frames.items():
        safe = name.replace(":", "_").replace(" ", "_")
        st.download_button(
            f"Download {name} (CSV)",
            data=df.to_csv(index=False).encode("utf-8"),
            file_name=f"{prefix}_{safe}.csv",
            mime="text/csv",
            key=f"dl_{prefix}_{safe}",
        )
