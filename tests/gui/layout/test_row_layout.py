"""Tests for RowLayoutEngine frame and height calculation."""

import random

import pytest

from reviewfeed import config
from reviewfeed.domain.models.review import ReviewRecord
from reviewfeed.domain.models.rows import RowModel
from reviewfeed.gui.layout.row_layout import SHOW_MORE_TEXT, RowLayoutEngine
from reviewfeed.gui.layout.text_metrics import TextMetrics

WIDTH = 375.0
WORDS = ["review", "great", "service", "table", "waiter", "wine", "dessert", "again", "a", "the"]


@pytest.fixture()
def engine(qapp):
    return RowLayoutEngine()


def _make_row(text: str = "Nice place", created: str = "12 May 2024", max_lines: int = 3) -> RowModel:
    record = ReviewRecord(
        text=text,
        created=created,
        first_name="Anna",
        last_name="Petrova",
        rating=4,
    )
    return RowModel.from_record(record, max_lines=max_lines)


class TestFrames:
    def test_avatar_in_top_left_inset(self, engine):
        result = engine.layout(_make_row(), WIDTH)
        assert result.avatar.x() == config.ROW_INSET_LEFT
        assert result.avatar.y() == config.ROW_INSET_TOP
        assert result.avatar.width() == config.AVATAR_SIZE
        assert result.avatar.height() == config.AVATAR_SIZE

    def test_column_right_of_avatar(self, engine):
        result = engine.layout(_make_row(), WIDTH)
        expected_x = config.ROW_INSET_LEFT + config.AVATAR_SIZE + config.AVATAR_TO_NAME_SPACING
        for frame in (result.name, result.rating, result.body, result.created):
            assert frame.x() == expected_x

    def test_name_top_aligned_with_avatar(self, engine):
        result = engine.layout(_make_row(), WIDTH)
        assert result.name.y() == result.avatar.y()

    def test_rating_strip_size_is_fixed(self, engine):
        result = engine.layout(_make_row(), WIDTH)
        assert result.rating.width() == 84
        assert result.rating.height() == 16
        assert result.rating.y() == result.name.bottom() + config.NAME_TO_RATING_SPACING

    def test_vertical_order(self, engine):
        result = engine.layout(_make_row(), WIDTH)
        assert result.body.y() == result.rating.bottom() + config.RATING_TO_TEXT_SPACING
        assert result.created.y() == result.body.bottom() + config.TEXT_TO_CREATED_SPACING
        assert result.total_height == result.created.bottom() + config.ROW_INSET_BOTTOM

    def test_body_within_column(self, engine):
        row = _make_row(" ".join(WORDS * 8), max_lines=0)
        result = engine.layout(row, WIDTH)
        column = WIDTH - config.ROW_INSET_LEFT - config.ROW_INSET_RIGHT - 46
        assert result.body.width() <= column


class TestExpandControl:
    def test_text_that_fits_has_no_control(self, engine):
        result = engine.layout(_make_row("word\nword\nword"), WIDTH)
        assert not result.shows_expand_control
        assert result.expand_control.isEmpty()

    def test_overflowing_text_shows_control(self, engine):
        result = engine.layout(_make_row("word\nword\nword\nword"), WIDTH)
        assert result.shows_expand_control
        assert result.expand_control.y() == result.body.bottom() + config.TEXT_TO_CREATED_SPACING
        assert result.created.y() == result.expand_control.bottom() + config.SHOW_MORE_TO_CREATED_SPACING

    def test_control_adds_its_height_and_spacing(self, engine):
        fits = engine.layout(_make_row("word\nword\nword"), WIDTH)
        overflows = engine.layout(_make_row("word\nword\nword\nword"), WIDTH)
        control = TextMetrics().measure(SHOW_MORE_TEXT)

        assert overflows.body.height() == fits.body.height()
        assert overflows.total_height - fits.total_height == (
            control.height() + config.SHOW_MORE_TO_CREATED_SPACING
        )

    def test_expanded_row_never_shows_control(self, engine):
        row = _make_row("word\nword\nword\nword\nword").expanded()
        result = engine.layout(row, WIDTH)
        assert not result.shows_expand_control

    def test_expanding_reveals_more_text(self, engine):
        row = _make_row(" ".join(WORDS * 20))
        collapsed = engine.layout(row, WIDTH)
        expanded = engine.layout(row.expanded(), WIDTH)
        assert collapsed.shows_expand_control
        assert expanded.body.height() > collapsed.body.height()


class TestEmptyBody:
    def test_empty_text_has_empty_body_frame(self, engine):
        result = engine.layout(_make_row(""), WIDTH)
        assert result.body.isEmpty()
        assert not result.shows_expand_control

    def test_created_follows_rating(self, engine):
        result = engine.layout(_make_row(""), WIDTH)
        assert result.created.y() == result.rating.bottom() + config.RATING_TO_TEXT_SPACING


class TestDeterminism:
    def test_height_matches_layout(self, engine):
        rng = random.Random(7)
        for _ in range(25):
            text = " ".join(rng.choice(WORDS) for _ in range(rng.randint(0, 80)))
            width = rng.uniform(120, 800)
            row = _make_row(text, max_lines=rng.choice([0, 1, 3]))
            assert engine.height(row, width) == engine.layout(row, width).total_height

    def test_repeated_layout_is_identical(self, engine):
        rng = random.Random(11)
        for _ in range(25):
            text = " ".join(rng.choice(WORDS) for _ in range(rng.randint(0, 80)))
            width = rng.uniform(120, 800)
            row = _make_row(text)
            first = engine.layout(row, width)
            second = RowLayoutEngine().layout(row, width)
            assert first == second

    def test_row_identity_does_not_affect_layout(self, engine):
        one = _make_row("Same words here")
        two = _make_row("Same words here")
        assert one.id != two.id
        assert engine.layout(one, WIDTH) == engine.layout(two, WIDTH)

    def test_narrow_width_still_lays_out(self, engine):
        result = engine.layout(_make_row("Some text"), 40)
        assert result.body.isEmpty()
        assert result.total_height > 0
