# Bike & Fun shop — Database Models
# Import all models here for SQLAlchemy discovery

from bikeshop.models.customer import Customer               # noqa
from bikeshop.models.bike_type import BikeType              # noqa
from bikeshop.models.rental_pricing import RentalPricing    # noqa
from bikeshop.models.rental import Rental, RentalItem       # noqa
from bikeshop.models.repair import Repair                   # noqa
from bikeshop.models.shop_settings import ShopSettings      # noqa
