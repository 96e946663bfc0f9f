import json

import numpy as np

from config import PackConfig
from core.boxes import Box, PackedBoxes, PlacedBox
from packing.guillotine import pack
from utils.serialization import load_layout, packed_from_dict, packed_to_dict, save_layout


def test_to_dict_layout():
    packed = PackedBoxes(10, 5, (PlacedBox(0, 0, 10, 5, 'a'),))
    assert packed_to_dict(packed) == {
        'width': 10,
        'height': 5,
        'boxes': [{'x': 0, 'y': 0, 'width': 10, 'height': 5, 'data': 'a'}],
    }


def test_flat_records():
    packed = PackedBoxes(10, 5, (PlacedBox(0, 0, 10, 5, 'a'),))
    assert packed.to_records() == (10, 5, [(0, 0, 10, 5, 'a')])


def test_numpy_scalars_become_json_numbers():
    packed = PackedBoxes(np.int64(4), np.float64(2.5), (PlacedBox(np.int64(0), 0, 4, 2.5),))
    text = json.dumps(packed_to_dict(packed))
    assert json.loads(text)['width'] == 4


def test_save_and_load_with_payload_codec(tmp_path):
    packed = pack(PackConfig(spacing=1), [Box(6, 4, {'name': 'a'}), Box(3, 3, {'name': 'b'})])
    path = str(tmp_path / "out" / "layout.json")

    save_layout(packed, path, encode_payload=lambda d: d['name'])
    with open(path) as f:
        assert [b['data'] for b in json.load(f)['boxes']] == ['a', 'b']

    loaded = load_layout(path, decode_payload=lambda name: {'name': name})
    assert loaded == packed


def test_from_dict_without_boxes():
    assert packed_from_dict({'width': 0, 'height': 0}) == PackedBoxes(0, 0)
