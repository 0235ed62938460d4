# app.py: multi-step form demo (streamlit run app.py)
from __future__ import annotations

import streamlit as st

from multistep.components.stepper import render_steps
from multistep.i18n import tr
from multistep.logging_context import configure_logging
from multistep.navigation.ui import get_form, render_navigation

configure_logging()

st.set_page_config(page_title="Multi-step form", layout="centered")

with st.sidebar:
    st.session_state["lang"] = st.radio("Sprache / Language", ("en", "de"), horizontal=True)
    tab_style = st.radio("Tab style", ("tab", "progress"), horizontal=True)
    hide_labels = st.checkbox("Hide progress labels", value=False)
    allow_incomplete = st.checkbox("Allow incomplete", value=False)
    show_contact = st.checkbox(tr("Kontaktschritt anzeigen", "Show contact step"), value=True)

form = get_form("demo")
form.update_options({"tabStyle": tab_style, "hideProgressLabels": hide_labels, "allowIncomplete": allow_incomplete})

# Declaration order of the container; ``contact`` is conditionally rendered.
form.on_step_mount("profile", 0, label=("Profil", "Profile"))
if show_contact:
    form.on_step_mount("contact", 1, label=("Kontakt", "Contact"))
else:
    form.on_step_unmount_conditional("contact")
form.on_step_mount("review", 2, label=("Prüfen", "Review"))

if render_steps(form.get_view_model(lang=st.session_state["lang"]), on_select=form.go_to, form_id=form.form_id):
    st.rerun()

active = form.active_key
if active == "profile":
    name = st.text_input(tr("Name (Pflichtfeld)", "Name (required)"), key="profile.name")
    form.on_field_validation_changed("profile", not name.strip(), field="profile.name")
elif active == "contact":
    st.text_input("E-Mail", key="contact.email")
elif active == "review":
    st.write(tr("Alles erledigt.", "All done."))

render_navigation(form)
