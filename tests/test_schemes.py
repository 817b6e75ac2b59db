from datetime import date

import pytest

from conftest import TODAY, make_scheme
from orderdesk.engine import Distributor, InvalidSchemeError, SchemePools, SchemeScope, eligible_schemes


@pytest.fixture
def pools() -> SchemePools:
    return SchemePools.from_schemes(
        [
            make_scheme("G1", "A", 10, "B", 2),
            make_scheme("S1", "A", 5, "C", 1, store_id="ST1"),
            make_scheme("S2", "A", 5, "C", 1, store_id="ST2"),
            make_scheme("D1", "B", 4, "B", 1, distributor_id="DIST1"),
            make_scheme("D2", "B", 4, "B", 1, distributor_id="DIST2"),
        ]
    )


def _ids(schemes) -> set:
    return {scheme.id for scheme in schemes}


def test_pools_partition_by_scope(pools) -> None:
    assert _ids(pools.global_schemes) == {"G1"}
    assert _ids(pools.store_schemes) == {"S1", "S2"}
    assert _ids(pools.distributor_schemes) == {"D1", "D2"}


def test_distributor_schemes_require_special_flag(pools) -> None:
    plain = Distributor(id="DIST1", name="Plain", store_id="ST1")
    special = Distributor(id="DIST1", name="Special", store_id="ST1", has_special_schemes=True)

    assert _ids(eligible_schemes(pools, plain, TODAY)) == {"G1", "S1"}
    assert _ids(eligible_schemes(pools, special, TODAY)) == {"G1", "S1", "D1"}


def test_store_schemes_need_a_matching_store(pools) -> None:
    plant_fed = Distributor(id="DIST9", name="Plant fed")
    assert _ids(eligible_schemes(pools, plant_fed, TODAY)) == {"G1"}


def test_store_transfers_only_see_global_schemes(pools) -> None:
    assert _ids(eligible_schemes(pools, None, TODAY)) == {"G1"}


def test_window_is_inclusive_on_both_ends() -> None:
    scheme = make_scheme("G1", "A", 10, "B", 2)
    pools = SchemePools.from_schemes([scheme])
    distributor = Distributor(id="D", name="D")

    assert eligible_schemes(pools, distributor, date(2024, 6, 1))
    assert eligible_schemes(pools, distributor, date(2024, 6, 30))
    assert not eligible_schemes(pools, distributor, date(2024, 5, 31))
    assert not eligible_schemes(pools, distributor, date(2024, 7, 1))


def test_stopped_scheme_is_never_eligible() -> None:
    stopped = make_scheme("G1", "A", 10, "B", 2, stopped_date=date(2024, 6, 20), stopped_by="ops")
    pools = SchemePools.from_schemes([stopped])
    assert eligible_schemes(pools, Distributor(id="D", name="D"), TODAY) == []


def test_duplicate_ids_collapse_to_one() -> None:
    scheme = make_scheme("G1", "A", 10, "B", 2)
    pools = SchemePools(global_schemes=(scheme, scheme))
    assert len(eligible_schemes(pools, Distributor(id="D", name="D"), TODAY)) == 1


def test_global_pool_ignores_mis_scoped_rows() -> None:
    store_scheme = make_scheme("S1", "A", 5, "C", 1, store_id="ST1")
    pools = SchemePools(global_schemes=(store_scheme,))
    assert eligible_schemes(pools, None, TODAY) == []


def test_scheme_scope_must_be_exclusive() -> None:
    with pytest.raises(InvalidSchemeError):
        make_scheme("X", "A", 10, "B", 2, is_global=True, store_id="ST1")


def test_scheme_quantities_must_be_positive() -> None:
    with pytest.raises(InvalidSchemeError):
        make_scheme("X", "A", 0, "B", 2)


def test_scope_property() -> None:
    assert make_scheme("G", "A", 1, "B", 1).scope is SchemeScope.GLOBAL
    assert make_scheme("S", "A", 1, "B", 1, store_id="ST1").scope is SchemeScope.STORE
    assert make_scheme("D", "A", 1, "B", 1, distributor_id="D1").scope is SchemeScope.DISTRIBUTOR
