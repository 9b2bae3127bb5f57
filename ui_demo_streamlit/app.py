"""Streamlit demo UI for task-intelligence."""

from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any

from task_intelligence.adapters import csv_adapter, json_adapter
from task_intelligence.duplicates import check_capture_for_duplicate
from task_intelligence.report import build_report
from task_intelligence.schema import ActivitySnapshot

SENTIMENTS = ["none", "positive", "neutral", "negative"]


def _parse_tasks_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse_tasks(file_path)
    if suffix == ".json":
        return json_adapter.parse_tasks(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    return _parse_tasks_from_path(temp_path)


def run_engine(tasks: list, activity: ActivitySnapshot, now: datetime, capture_text: str) -> dict[str, Any]:
    """Run all engine steps and return a UI-friendly result payload."""

    result = build_report(tasks, activity, now=now)
    result["capture"] = check_capture_for_duplicate(capture_text, tasks) if capture_text.strip() else None
    return result


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Task Intelligence Demo", layout="wide")
    st.title("Task Intelligence — Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload task list", type=["csv", "json"])
        use_demo = st.checkbox("Load demo tasks", value=True)
        now_date = st.date_input("Today", value=datetime(2025, 3, 4).date())
        now_hour = st.slider("Now hour", min_value=0, max_value=23, value=19)
        completed_today = st.number_input("Tasks completed today", min_value=0, value=3, step=1)
        created_today = st.number_input("Tasks created today", min_value=0, value=9, step=1)
        overdue = st.number_input("Tasks overdue", min_value=0, value=2, step=1)
        streak = st.number_input("Streak (days)", min_value=0, value=4, step=1)
        one_thing = st.checkbox("ONE thing completed", value=False)
        sentiment = st.selectbox("Voice sentiment", options=SENTIMENTS, index=0)
        capture_text = st.text_input("Capture text to check", value="")
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tasks = json_adapter.parse_tasks("examples/sample_tasks.json")
            data_source = "demo tasks (examples/sample_tasks.json)"
        elif uploaded is not None:
            tasks = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo tasks'.")
            return

        activity = ActivitySnapshot(
            tasks_completed_today=int(completed_today),
            tasks_created_today=int(created_today),
            tasks_overdue=int(overdue),
            streak_count=int(streak),
            one_thing_completed=bool(one_thing),
            voice_sentiment=None if sentiment == "none" else sentiment,
        )
        now = datetime.combine(now_date, datetime.min.time()).replace(hour=int(now_hour))

        result = run_engine(tasks, activity, now, capture_text)

        st.success(f"Loaded {len(tasks)} tasks from {data_source}.")

        st.subheader("A) Cognitive Load")
        load = result["cognitive_load"]
        c1, c2, c3, c4, c5 = st.columns(5)
        c1.metric("overall", load["overall"])
        c2.metric("level", result["load_level"])
        c3.metric("stress", load["stress_signals"])
        c4.metric("momentum", load["momentum_signals"])
        c5.metric("fatigue", load["fatigue_signals"])
        for line in result["recommendations"]:
            st.write(f"- {line}")

        st.subheader("B) Buckets")
        st.table([result["buckets"]])

        st.subheader("C) Workload Suggestions")
        if result["suggestions"]:
            st.table(result["suggestions"])
        else:
            st.write("No suggestions right now.")

        st.subheader("D) Duplicates")
        st.table([result["duplicates"]])

        if result["capture"] is not None:
            st.subheader("E) Capture Check")
            capture = result["capture"]
            if capture.is_duplicate:
                st.warning(
                    f"{capture.match_type} duplicate of '{capture.duplicate_text}' in {capture.location} "
                    f"(similarity {capture.similarity:.2f})"
                )
            else:
                st.write("No duplicate found.")

    except ValueError as exc:
        st.error(f"Input error: {exc}")
    except Exception:
        st.error("Something went wrong while running the demo. Please verify the input format.")


if __name__ == "__main__":
    main()
