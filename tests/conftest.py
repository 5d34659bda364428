import matplotlib
matplotlib.use('Agg')

import json

import pandas as pd
import pytest


@pytest.fixture
def observations():
    return pd.DataFrame({
        'region': ['CA', 'TX', 'CA'],
        'category': ['income', 'income', 'rent'],
        'estimate': [60000.0, 55000.0, 1200.0],
        'margin': [100.0, 120.0, 5.0],
    })


@pytest.fixture
def coordinates():
    return pd.DataFrame({
        'region': ['CA'],
        'longitude': [-119.4],
        'latitude': [36.7],
    })


@pytest.fixture
def coordinates_csv(tmp_path):
    path = tmp_path / 'states.csv'
    path.write_text(
        "state,longitude,latitude\n"
        "California,-119.681564,36.116203\n"
        "Texas,-97.563461,31.054487\n"
    )
    return path


@pytest.fixture
def boundaries_geojson(tmp_path):
    def square(lon, lat):
        return [[[lon - 1, lat - 1], [lon + 1, lat - 1], [lon + 1, lat + 1],
                 [lon - 1, lat + 1], [lon - 1, lat - 1]]]

    geo = {
        'type': 'FeatureCollection',
        'features': [
            {'type': 'Feature', 'properties': {'name': 'California'},
             'geometry': {'type': 'Polygon', 'coordinates': square(-119.7, 36.1)}},
            {'type': 'Feature', 'properties': {'name': 'Texas'},
             'geometry': {'type': 'Polygon', 'coordinates': square(-97.6, 31.1)}},
        ],
    }
    path = tmp_path / 'states.json'
    path.write_text(json.dumps(geo))
    return path
