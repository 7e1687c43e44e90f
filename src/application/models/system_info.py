"""Static facts about the running agent, resolved once from settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SystemInfo:
    title: str
    version: str
    environment: str
    git_commit: str
    build_time: str
    llm_base_url: str
    llm_model_name: str
    alert_policy: str
