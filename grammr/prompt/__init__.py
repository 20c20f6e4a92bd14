"""Prompt templates for correction requests."""

from .render_prompt import render_system_prompt, render_user_prompt

__all__ = ["render_system_prompt", "render_user_prompt"]
