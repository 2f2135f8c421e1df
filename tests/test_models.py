import dataclasses

import pytest

from romdb.models import LookupResult, RomDetail


def _detail(name):
    return RomDetail(crc='1 1', good_name=name, base_name=name, art_name=None,
                     art_url=None, wiki_url=None, save_type=None)


def test_detail_is_immutable():
    detail = _detail('Game')
    with pytest.raises(dataclasses.FrozenInstanceError):
        detail.players = 2


def test_lookup_result_provenance():
    guess = LookupResult(detail=_detail('Guess'), source='guess')
    ambiguous = LookupResult(detail=_detail('A'), source='crc',
                             candidates=(_detail('A'), _detail('B')))

    assert guess.is_guess and not guess.is_ambiguous
    assert ambiguous.is_ambiguous and not ambiguous.is_guess
    assert [c['good_name'] for c in ambiguous.to_dict()['candidates']] == ['A', 'B']
