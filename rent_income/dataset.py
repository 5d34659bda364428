"""
Embedded US Rent & Income Dataset

2017 American Community Survey 5-year estimates, one row per region and
category:
- income: median yearly income (dollars)
- rent: median monthly rent (dollars)

The margin column is the 90% margin of error reported with each estimate.
"""

import pandas as pd
import numpy as np

CATEGORIES = ('income', 'rent')

COLUMNS = ['region', 'category', 'estimate', 'margin']

# (region, income, income moe, rent, rent moe)
_RENT_INCOME = (
    ('Alabama', 24476, 136, 747, 3),
    ('Alaska', 32940, 508, 1200, 13),
    ('Arizona', 27517, 148, 972, 4),
    ('Arkansas', 23789, 165, 709, 5),
    ('California', 29454, 109, 1358, 3),
    ('Colorado', 32401, 109, 1125, 5),
    ('Connecticut', 35326, 195, 1123, 5),
    ('Delaware', 31560, 247, 1076, 10),
    ('District of Columbia', 43198, 681, 1424, 17),
    ('Florida', 25952, 70, 1077, 3),
    ('Georgia', 27024, 106, 927, 3),
    ('Hawaii', 32453, 218, 1507, 18),
    ('Idaho', 25298, 208, 792, 7),
    ('Illinois', 30684, 83, 952, 3),
    ('Indiana', 27247, 117, 782, 3),
    ('Iowa', 30002, 143, 740, 4),
    ('Kansas', 29126, 208, 801, 5),
    ('Kentucky', 24702, 159, 713, 4),
    ('Louisiana', 25086, 155, 825, 4),
    ('Maine', 26841, 187, 808, 7),
    ('Maryland', 37147, 152, 1311, 5),
    ('Massachusetts', 34498, 199, 1173, 5),
    ('Michigan', 26987, 82, 824, 3),
    ('Minnesota', 32734, 189, 906, 4),
    ('Mississippi', 22766, 194, 740, 5),
    ('Missouri', 26999, 113, 784, 4),
    ('Montana', 26249, 206, 751, 9),
    ('Nebraska', 30020, 146, 773, 4),
    ('Nevada', 29019, 213, 1017, 6),
    ('New Hampshire', 33172, 387, 1052, 9),
    ('New Jersey', 35075, 148, 1249, 4),
    ('New Mexico', 24457, 214, 809, 6),
    ('New York', 31057, 69, 1194, 3),
    ('North Carolina', 26482, 111, 844, 3),
    ('North Dakota', 32336, 245, 775, 9),
    ('Ohio', 27435, 94, 764, 2),
    ('Oklahoma', 26207, 101, 766, 3),
    ('Oregon', 27389, 146, 988, 4),
    ('Pennsylvania', 28923, 119, 885, 3),
    ('Rhode Island', 30210, 259, 957, 6),
    ('South Carolina', 25454, 123, 836, 4),
    ('South Dakota', 28821, 276, 696, 7),
    ('Tennessee', 25453, 102, 808, 4),
    ('Texas', 28063, 110, 952, 2),
    ('Utah', 27928, 239, 948, 6),
    ('Vermont', 29351, 361, 945, 11),
    ('Virginia', 32545, 202, 1166, 5),
    ('Washington', 32318, 113, 1120, 4),
    ('West Virginia', 23707, 203, 681, 5),
    ('Wisconsin', 29868, 135, 813, 3),
    ('Wyoming', 30854, 342, 828, 11),
    ('Puerto Rico', None, None, 464, 6),
)


def load_rent_income() -> pd.DataFrame:
    """
    Return the rent/income table in long format.

    A new DataFrame is built on every call, so changes made by the caller
    never leak back into the embedded records.
    """
    records = []
    for region, income, income_moe, rent, rent_moe in _RENT_INCOME:
        records.append((region, 'income', income, income_moe))
        records.append((region, 'rent', rent, rent_moe))

    df = pd.DataFrame.from_records(records, columns=COLUMNS)
    df['estimate'] = df['estimate'].astype(float)
    df['margin'] = df['margin'].astype(float)
    return df


def category_counts() -> pd.Series:
    """Number of non-missing estimates per category."""
    df = load_rent_income()
    return df.dropna(subset=['estimate']).groupby('category').size().reindex(
        list(CATEGORIES), fill_value=0
    ).astype(np.int64)
