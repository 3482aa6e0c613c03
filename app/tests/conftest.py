import pytest

from tests.workbooks import (
    DELIVERY_HEADERS, EMPLOYABILITY_HEADERS, QUALITY_HEADERS, SALES_HEADERS, write_workbook,
)


@pytest.fixture
def make_workbook(tmp_path):
    """Write an .xlsx with the given {sheet name: [header row, *data rows]} and return its path."""
    def _make(sheets, name='daily_data.xlsx'):
        return write_workbook(tmp_path / name, sheets)
    return _make


@pytest.fixture
def sample_workbook(make_workbook):
    """A small workbook covering all four sheets, with one undated row per sheet."""
    return make_workbook({
        'Sales Pipeline-Database': [
            SALES_HEADERS,
            [45684, 'Yes', 45729, 'Won', 45789, 105, 45819, 500000, 'Ahmedabad', 'GJ'],
            [45689, 'Yes', None, 'Lost', None, None, None, None, 'Mumbai', 'MH'],
            [None, 'No', None, None, None, None, None, None, 'Delhi', 'DL'],
        ],
        'Employability-Database': [
            EMPLOYABILITY_HEADERS,
            [45680, 10, 1, 1, 'Better Opportunity', 20, 2, 2, 'Relocation', 30, 0, 3, 'Better Opportunity',
             60, 2, 2, 4, 8, 1],
            [45681, 11, None, None, None, 21, None, None, None, 31, None, None, None,
             None, None, None, None, None, None],
            [None, 5, 0, 0, None, 5, 0, 0, None, 5, 0, 0, None, None, 1, 1, 1, 1, 1],
        ],
        'Quality-Database': [
            QUALITY_HEADERS,
            [45680, 1200, 20, 'Specification', 1500, 2, 1, 100000, 3, 75000],
            [45681, 1000, 22, None, 950, None, None, None, None, None],
            [None, 10, 1, 'Finish', 10, 0, 0, 0, 0, 0],
        ],
        'Delivery-Database': [
            DELIVERY_HEADERS,
            [45680, 500000, 45711, 45711, 31, 0, 0, None],
            [45681, 650000, 45716, 45717, 35, 1, 650000, 'No RM'],
            [None, 100, None, None, 10, 0, 0, None],
        ],
    })
