"""
Tests for the kiosk session schema and string tables.
"""

import pytest

from ecokiosk.content.strings import TEXTS, TRANSLATION_KEYS, get_strings
from ecokiosk.state.session import KioskSession, Language, Material, Step


# ─── Points ──────────────────────────────────────────────────────────────────

class TestPoints:
    def test_material_rates(self):
        assert Material.PLASTIC.rate == 10
        assert Material.PAPER.rate == 5

    @pytest.mark.parametrize("material", list(Material))
    @pytest.mark.parametrize("count", [0, 1, 3, 17])
    def test_points_is_count_times_rate(self, material, count):
        session = KioskSession(material=material, count=count)
        assert session.points == count * material.rate

    def test_points_follow_material_switch(self):
        """Points are derived, so a material change is reflected immediately."""
        session = KioskSession(material=Material.PLASTIC, count=4)
        assert session.points == 40
        session.material = Material.PAPER
        assert session.points == 20


# ─── Lifecycle ───────────────────────────────────────────────────────────────

class TestSessionLifecycle:
    def test_defaults(self):
        session = KioskSession()
        assert session.step == Step.WELCOME
        assert session.material == Material.PLASTIC
        assert session.count == 0
        assert session.last_fact is None
        assert session.previous_step is None

    def test_transition_records_previous_step(self):
        session = KioskSession()
        session.transition_to(Step.SCAN_CARD)
        assert session.step == Step.SCAN_CARD
        assert session.previous_step == Step.WELCOME

    def test_reset_clears_count_and_fact(self):
        session = KioskSession(
            step=Step.SUCCESS, language=Language.RU, material=Material.PAPER,
            count=5, last_fact="Great job",
        )
        old_id = session.session_id
        session.reset()
        assert session.step == Step.WELCOME
        assert session.count == 0
        assert session.last_fact is None
        assert session.session_id != old_id

    def test_reset_keeps_language(self):
        session = KioskSession(step=Step.SUCCESS, language=Language.ENG)
        session.reset()
        assert session.language == Language.ENG

    def test_to_dict(self):
        session = KioskSession(
            step=Step.INSERTING, language=Language.ENG, material=Material.PAPER, count=3,
        )
        data = session.to_dict()
        assert data["step"] == "inserting"
        assert data["language"] == "eng"
        assert data["material"] == "paper"
        assert data["count"] == 3
        assert data["points"] == 15
        assert data["fact_text"] is None


# ─── String Tables ───────────────────────────────────────────────────────────

class TestStrings:
    def test_every_language_has_a_table(self):
        assert set(TEXTS) == set(Language)

    @pytest.mark.parametrize("language", list(Language))
    def test_every_table_has_all_keys(self, language):
        assert set(TEXTS[language]) == set(TRANSLATION_KEYS)
        assert all(TEXTS[language].values())

    def test_lookup_by_code(self):
        assert get_strings("eng")["confirm"] == "Confirm"
        assert get_strings(Language.RU)["paper"] == "Бумага"
