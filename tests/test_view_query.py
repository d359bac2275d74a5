import math

import pytest

from core.config import ViewConfig
from navigation.camera import Camera
from universe.view_query import closest_to_center, frame_view, visible_stars

ORIGIN = (0.0, 0.0, 0.0)
FORWARD = (0.0, 0.0, -1.0)


def _names(entries):
    return [e.body.name for e in entries]


def _off_axis(d, degrees):
    a = math.radians(degrees)
    return (d * math.sin(a), 0.0, -d * math.cos(a))


class TestVisibleStars:

    def test_farthest_first_and_culled(self, star_factory):
        stars = [
            star_factory("near", (0, 0, -5)),
            star_factory("behind", (0, 0, 5)),
            star_factory("far", (1, 0, -20)),
            star_factory("too far", (0, 0, -1001)),
            star_factory("wide", (10, 0, -2)),        # ~79 degrees off axis
            star_factory("mid", (0, 0, -10)),
        ]
        result = visible_stars(stars, ORIGIN, FORWARD)
        assert _names(result) == ["far", "mid", "near"]
        assert result[0].distance_ly == pytest.approx(math.hypot(1, 20))

    def test_entries_carry_render_data(self, star_factory):
        star = star_factory("m", (0, 0, -3), radius_solar=0.5, spectral_class="M2V")
        (entry,) = visible_stars([star], ORIGIN, FORWARD)
        assert entry.color == (255, 140, 90)
        assert entry.radius_km == star.radius_km

    def test_equal_distances_both_kept(self, star_factory):
        stars = [star_factory("a", (0, 0, -10)), star_factory("b", (6, 0, -8))]
        result = visible_stars(stars, ORIGIN, FORWARD)
        assert sorted(_names(result)) == ["a", "b"]
        assert result[0].distance_ly > result[1].distance_ly
        assert result[1].distance_ly == 10.0

    def test_keys_strictly_decreasing(self, star_factory):
        stars = [star_factory(f"s{i}", (0, i % 3, -10 - i % 4)) for i in range(24)]
        keys = [e.distance_ly for e in visible_stars(stars, ORIGIN, FORWARD)]
        assert len(keys) == 24
        assert all(a > b for a, b in zip(keys, keys[1:]))

    def test_boundary_distance_included(self, star_factory):
        stars = [star_factory("edge", (0, 0, -1000))]
        assert _names(visible_stars(stars, ORIGIN, FORWARD)) == ["edge"]

    def test_star_at_camera_excluded(self, star_factory):
        stars = [star_factory("here", (0, 0, 0)), star_factory("there", (0, 0, -1))]
        assert _names(visible_stars(stars, ORIGIN, FORWARD)) == ["there"]

    def test_forward_need_not_be_unit(self, star_factory):
        stars = [star_factory("x", (0, 0, -4))]
        assert len(visible_stars(stars, ORIGIN, (0, 0, -7.5))) == 1

    def test_config_override(self, star_factory):
        stars = [star_factory("far", (0, 0, -20)), star_factory("near", (0, 0, -5))]
        cfg = ViewConfig(visible_max_distance_ly=15.0)
        assert _names(visible_stars(stars, ORIGIN, FORWARD, cfg)) == ["near"]

    def test_empty(self):
        assert visible_stars([], ORIGIN, FORWARD) == []


class TestClosestToCenter:

    def test_near_on_axis_beats_far(self, star_factory):
        stars = [star_factory("far", (0.5, 0, -20)), star_factory("near", (0, 0, -3))]
        assert closest_to_center(stars, ORIGIN, FORWARD).name == "near"

    def test_near_star_bonus(self, star_factory):
        # without halving 'close' scores ~0.43 and would lose to 'axis' (0.3)
        stars = [star_factory("axis", (0, 0, -12)), star_factory("close", (0.5, 0, -4.5))]
        assert closest_to_center(stars, ORIGIN, FORWARD).name == "close"

    def test_unscored_candidates_fall_back_to_nearest(self, star_factory):
        stars = [star_factory("300", (0, 0, -300)), star_factory("200", (0, 0, -200))]
        assert closest_to_center(stars, ORIGIN, FORWARD).name == "200"

    def test_outside_cone_is_none(self, star_factory):
        stars = [star_factory("wide", (4, 0, -10))]     # ~21.8 degrees
        assert closest_to_center(stars, ORIGIN, FORWARD) is None

    def test_beyond_range_is_none(self, star_factory):
        stars = [star_factory("remote", (0, 0, -501))]
        assert closest_to_center(stars, ORIGIN, FORWARD) is None

    def test_empty_is_none(self):
        assert closest_to_center([], ORIGIN, FORWARD) is None

    def test_only_nearest_candidates_scored(self, star_factory):
        stars = [star_factory("axis", (0, 0, -20))]
        stars += [star_factory(f"d{d}", _off_axis(d, 14.0)) for d in range(6, 16)]
        # 'axis' would score 0.3 but is the 11th nearest candidate
        assert closest_to_center(stars, ORIGIN, FORWARD).name == "d6"

    def test_from_offset_camera(self, star_factory):
        stars = [star_factory("a", (100, 0, -3)), star_factory("b", (0, 0, -3))]
        assert closest_to_center(stars, (100, 0, 0), FORWARD).name == "a"


def test_frame_view_uses_camera(star_factory):
    camera = Camera(position=(0.0, 0.0, 1.0))
    stars = [star_factory("ahead", (0, 0, -2)), star_factory("behind", (0, 0, 4))]
    view = frame_view(stars, camera)
    assert [e.body.name for e in view.visible] == ["ahead"]
    assert view.target.name == "ahead"
