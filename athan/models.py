# athan/models.py

from datetime import datetime
from .extensions import db


class CachedMonthTimes(db.Model):
    """
    A month of authoritative prayer times for one (city, country), as returned by the
    remote calendar API. Rows never expire: a month's times depend only on geometry,
    so a row is replaced only by a fresh successful fetch for the same key.
    """
    __tablename__ = 'cached_month_times'
    __table_args__ = (db.UniqueConstraint('city', 'country', 'year', 'month', name='uq_city_country_year_month'),)

    # '{city}-{country}-{month}-{year}', the key the app has always used for this store.
    cache_key = db.Column(db.String(255), primary_key=True)

    city = db.Column(db.String(120), nullable=False)
    country = db.Column(db.String(120), nullable=False)
    year = db.Column(db.Integer, nullable=False)
    month = db.Column(db.Integer, nullable=False)

    # {"1": ["05:12", "07:01", "12:10", "14:30", "17:18", "18:58"], "2": [...], ...}
    times = db.Column(db.JSON, nullable=False)

    captured_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f'<CachedMonthTimes {self.cache_key}>'
