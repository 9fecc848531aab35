import pytest
from sqlalchemy import Text

from city_explorer.models import Location, Movie, Yelp


@pytest.mark.parametrize(
    "column",
    [
        Location.__table__.c.search_query,
        Location.__table__.c.formatted_query,
        Movie.__table__.c.title,
        Movie.__table__.c.image_url,
        Yelp.__table__.c.name,
        Yelp.__table__.c.image_url,
    ],
    ids=lambda column: f"{column.table.name}.{column.name}",
)
def test_free_text_columns_are_unbounded(column):
    # PostgreSQL rejects over-long VARCHAR values instead of truncating them
    assert isinstance(column.type, Text)
    assert column.type.length is None
