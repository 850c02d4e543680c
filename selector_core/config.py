#!/usr/bin/env python3
from dataclasses import dataclass, field
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Config:
    """Engine configuration"""
    # Classes owned by our own overlay, never part of structural comparison
    reserved_class_prefix: str = os.getenv("SELECTOR_RESERVED_CLASS_PREFIX", "element-selector-")

    # Quiescence window for editor re-validation
    validation_debounce_ms: int = int(os.getenv("SELECTOR_VALIDATION_DEBOUNCE_MS", "500"))

    # Anchor selector building
    anchor_max_classes: int = int(os.getenv("SELECTOR_ANCHOR_MAX_CLASSES", "2"))
    skip_dynamic_ids: bool = os.getenv("SELECTOR_SKIP_DYNAMIC_IDS", "true").lower() in ["true", "1", "yes"]

    # Attributes recorded with each selection
    relevant_attributes: List[str] = field(default_factory=lambda: _env_list(
        "SELECTOR_RELEVANT_ATTRIBUTES",
        "id,class,data-testid,data-id,role,type,name,href",
    ))

    # Live page snapshots
    headless: bool = os.getenv("SELECTOR_HEADLESS", "true").lower() == "true"
    navigation_timeout_ms: int = int(os.getenv("SELECTOR_NAV_TIMEOUT_MS", "30000"))

    enable_debug: bool = os.getenv("SELECTOR_DEBUG", "false").lower() == "true"

    @property
    def validation_debounce_seconds(self) -> float:
        return self.validation_debounce_ms / 1000.0


config = Config()
