import pytest

from universe.bodies import planet_around, star_from_galactic
from universe.universe import Universe, compound_key


def _star(name, hip_id=0, x=1.0):
    return star_from_galactic(hip_id, False, name, "G2V", abs(x), x, 0.0, 0.0)


class TestIndexing:

    def test_name_lookup_is_case_insensitive(self, empty_universe):
        uid = empty_universe.add_star(_star("Alpha Centauri", 71683))
        assert empty_universe.lookup("ALPHA CENTAURI").uid == uid
        assert empty_universe.lookup("  alpha centauri ").uid == uid
        assert empty_universe.lookup("hip71683").uid == uid
        assert empty_universe.get_by_hip(71683).uid == uid

    def test_later_current_row_takes_the_name(self, empty_universe):
        first = empty_universe.add_star(_star("Twin", 10))
        second = empty_universe.add_star(_star("Twin", 11, x=2.0))
        assert empty_universe.lookup("twin").uid == second
        # still reachable through its HIP id
        assert empty_universe.get(first) is not None
        assert empty_universe.lookup("hip10").uid == first

    def test_star_that_loses_every_key_is_dropped(self, empty_universe):
        first = empty_universe.add_star(_star("Twin"))
        second = empty_universe.add_star(_star("Twin", x=2.0))
        assert first not in empty_universe
        assert empty_universe.star_count == 1
        assert empty_universe.lookup("twin").uid == second

    def test_legacy_first_name_wins(self, empty_universe):
        first = empty_universe.add_star(_star("Gliese"), overwrite_name=False,
                                        system_name="Sys A")
        second = empty_universe.add_star(_star("Gliese", x=3.0), overwrite_name=False,
                                         system_name="Sys B")
        assert empty_universe.lookup("gliese").uid == first
        assert empty_universe.lookup("sys_b_gliese").uid == second
        assert empty_universe.star_count == 2

    def test_compound_key(self):
        assert compound_key("Alpha Centauri", "Proxima Centauri") == \
            "alpha_centauri_proxima_centauri"

    def test_keys_lists_every_index(self, empty_universe):
        empty_universe.add_star(_star("Vega", 91262), system_name="Lyra")
        assert set(empty_universe.keys()) == {"vega", "lyra_vega", "hip91262"}

    def test_rejects_planet_as_star(self, empty_universe):
        host = _star("Host")
        empty_universe.add_star(host)
        planet = planet_around("b", host, 1.0, 1.0, 1.0)
        with pytest.raises(ValueError):
            empty_universe.add_star(planet)


class TestPlanets:

    def test_planets_of_and_host_of(self, empty_universe):
        host = _star("Host")
        empty_universe.add_star(host)
        b = planet_around("b", host, 1.0, 1.0, 1.0)
        c = planet_around("c", host, 2.0, 1.0, 1.0)
        empty_universe.add_planet(b)
        empty_universe.add_planet(c)
        assert [p.name for p in empty_universe.planets_of(host)] == ["b", "c"]
        assert empty_universe.host_of(b) is host
        assert empty_universe.planet_count == 2

    def test_unknown_host_rejected(self, empty_universe):
        orphan_host = _star("Elsewhere")
        orphan_host.uid = 99
        planet = planet_around("p", orphan_host, 1.0, 1.0, 1.0)
        with pytest.raises(KeyError):
            empty_universe.add_planet(planet)

    def test_removing_star_removes_its_planets(self, empty_universe):
        host = _star("Host", 5)
        other = _star("Other", 6, x=40.0)
        empty_universe.add_star(host)
        empty_universe.add_star(other)
        empty_universe.add_planet(planet_around("b", host, 1.0, 1.0, 1.0))
        empty_universe.add_planet(planet_around("x", other, 1.0, 1.0, 1.0))

        removed = empty_universe.remove(host.uid)

        assert [b.name for b in removed] == ["Host", "b"]
        assert [p.name for p in empty_universe.get_planets()] == ["x"]
        assert empty_universe.lookup("host") is None
        assert empty_universe.get_by_hip(5) is None

    def test_remove_unknown_uid_is_noop(self, empty_universe):
        assert empty_universe.remove(12345) == []

    def test_removing_planet_detaches_it_from_host(self, empty_universe):
        host = _star("Host")
        empty_universe.add_star(host)
        b = planet_around("b", host, 1.0, 1.0, 1.0)
        empty_universe.add_planet(b)
        empty_universe.remove(b.uid)
        assert empty_universe.planets_of(host) == []
        assert empty_universe.remove(host.uid) == [host]


class TestBulkRemoval:

    def test_key_taken_over_survives_removal_of_previous_owner(self, empty_universe):
        first = empty_universe.add_star(_star("Twin", 10))
        second = empty_universe.add_star(_star("Twin", 11, x=2.0))
        empty_universe.remove(first)
        assert empty_universe.lookup("twin").uid == second
        assert set(empty_universe.keys()) == {"twin", "hip11"}

    def test_many_removals_keep_indices_consistent(self, empty_universe, star_factory):
        uids = [empty_universe.add_star(star_factory(f"s{i}", (0, 0, 0), hip_id=i + 1))
                for i in range(20000)]
        removed = empty_universe.remove_many(uids[1:])
        assert len(removed) == 19999
        assert empty_universe.star_count == 1
        assert sorted(empty_universe.keys()) == ["hip1", "s0"]


class TestSearch:

    @pytest.fixture
    def universe(self):
        u = Universe()
        u.add_star(_star("Sun"))
        u.add_star(_star("Alpha Centauri", 71683, x=4.3))
        u.add_star(_star("Proxima Centauri", 70890, x=4.2))
        return u

    def test_by_hip_prefix(self, universe):
        assert universe.search("HIP70890").name == "Proxima Centauri"

    def test_by_bare_number(self, universe):
        assert universe.search("71683").name == "Alpha Centauri"

    def test_exact_key(self, universe):
        assert universe.search("sun").name == "Sun"

    def test_substring_first_match(self, universe):
        assert universe.search("centauri").name == "Alpha Centauri"
        assert universe.search("prox").name == "Proxima Centauri"

    def test_unknown_number_falls_through_to_substring(self, universe):
        assert universe.search("99999") is None

    def test_no_match(self, universe):
        assert universe.search("betelgeuse") is None
        assert universe.search("   ") is None


def test_repr_counts(empty_universe):
    empty_universe.add_star(_star("Solo"))
    assert repr(empty_universe) == "<Universe: 1 stars, 0 planets>"
    assert len(empty_universe) == 1
