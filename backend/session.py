# Directory session - owns filters, pills, search box and the clinic collection
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from errors import DataSourceError
from filters import FilterSet, active_terms, search_summary
from highlight import highlight, segments_to_dicts
from models import Clinic
from pills import PillBar
from projector import project, search_text_matches
from source import ClinicSource

logger = logging.getLogger(__name__)

# Table columns in display order: (column key, label)
COLUMNS = [
    ("clinicCode", "Clinic ID"),
    ("name", "Clinic Name"),
    ("doctorName", "Doctor Name"),
    ("address", "Clinic Address"),
    ("phone", "Phone Number"),
]


class DirectorySession:
    """
    State of one directory page.

    Every mutation runs to completion and leaves filters, search box text,
    highlight terms and visible rows consistent with each other.
    """

    def __init__(self, source: ClinicSource, load: bool = True):
        self.source = source
        self.reset(load)

    def reset(self, load: bool = True) -> None:
        """Back to a freshly mounted page"""
        self.filters = FilterSet()
        self.pills = PillBar()
        self.clinics: List[Clinic] = []
        self.search_text = ""
        self.error: Optional[str] = None
        if load:
            self.reload()

    # Derived state

    @property
    def search_summary(self) -> str:
        return search_summary(self.filters)

    @property
    def active_terms(self) -> List[str]:
        return active_terms(self.filters, self.search_text)

    @property
    def open_key(self) -> Optional[str]:
        return self.pills.open_key

    def visible(self) -> List[Clinic]:
        rows = project(self.clinics, self.filters)
        if self.filters.is_empty() and self.search_text.strip():
            rows = [c for c in rows if search_text_matches(c, self.search_text)]
        return rows

    # Filter store

    def _filters_changed(self) -> None:
        self.pills.sync(self.filters.values())
        self.search_text = self.search_summary
        logger.debug("Filters now %r", self.filters)

    def set_filter(self, key: str, value: Optional[str]) -> None:
        self.filters.set(key, value)
        self._filters_changed()

    def clear_filter(self, key: str) -> None:
        self.filters.clear(key)
        self._filters_changed()

    def clear_all(self) -> None:
        self.filters.clear_all()
        self.pills.close()
        self._filters_changed()
        self.reload()

    def set_search_text(self, text: Optional[str]) -> None:
        """Typing into the search box"""
        self.search_text = text or ""

    # Pills

    def open_pill(self, key: str) -> None:
        self.pills.open(key)

    def toggle_pill(self, key: str) -> None:
        self.pills.toggle(key)

    def close_pill(self) -> None:
        self.pills.close()

    def edit_draft(self, key: str, value: str) -> None:
        self.pills.edit(key, value)

    def apply_pill(self, key: str) -> None:
        self.set_filter(key, self.pills.apply(key))

    def clear_pill(self, key: str) -> None:
        self.pills.clear(key)
        self.clear_filter(key)

    # Data source

    def receive_clinics(self, clinics: List[Clinic]) -> None:
        """Replace the collection; projection follows the current filters"""
        self.clinics = list(clinics)

    def _load(self, fetch, *args) -> bool:
        try:
            clinics = fetch(*args)
        except DataSourceError as exc:
            logger.error("Clinic request failed: %s", exc.message, exc_info=True)
            self.error = exc.message
            return False
        self.error = None
        self.receive_clinics(clinics)
        return True

    def reload(self, filters: Optional[Dict] = None) -> bool:
        return self._load(self.source.fetch_clinics, filters)

    def submit_search(self, text: Optional[str]) -> bool:
        """
        Server-side search; an empty term reloads everything.
        Submitting drops the active filters so the box text and the rows agree.
        """
        if not self.filters.is_empty():
            self.filters.clear_all()
            self._filters_changed()
        self.search_text = text or ""
        term = self.search_text.strip()
        if not term:
            return self.reload()
        return self._load(self.source.search_clinics, term)

    def add_clinic(self, payload) -> Clinic:
        clinic = self.source.add_clinic(payload)
        if clinic not in self.clinics:
            self.clinics.append(clinic)
        return clinic

    # Rendering

    def render_row(self, clinic: Clinic, terms: List[str]) -> Dict:
        cells = {
            column: segments_to_dicts(highlight(getattr(clinic, column) or "", terms))
            for column, _label in COLUMNS
        }
        cells["services"] = [
            segments_to_dicts(highlight(label, terms)) for label in clinic.service_labels()
        ]
        return {"id": clinic.id, "cells": cells}

    def view(self) -> Dict:
        terms = self.active_terms
        rows = self.visible()
        return {
            "filters": self.filters.values(),
            "searchText": self.search_text,
            "searchSummary": self.search_summary,
            "activeTerms": terms,
            "openPill": self.open_key,
            "pills": self.pills.to_list(),
            "error": self.error,
            "columns": [{"key": k, "label": label} for k, label in COLUMNS]
            + [{"key": "services", "label": "Services"}],
            "rows": [self.render_row(c, terms) for c in rows],
            "total": len(self.clinics),
            "visible": len(rows),
        }
