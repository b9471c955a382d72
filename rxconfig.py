"""Reflex configuration for the Mixer Admin application."""

import reflex as rx

config = rx.Config(
    app_name="mixer_admin",
    # Use the src directory structure
    app_module_import="mixer_admin.app",
)
