import django_filters

from modules.offers.models import Offer


class OfferFilter(django_filters.FilterSet):
    sector = django_filters.CharFilter(field_name="sector", lookup_expr="iexact")
    ticker = django_filters.CharFilter(field_name="ticker", lookup_expr="iexact")
    min_price = django_filters.NumberFilter(
        field_name="price_per_share", lookup_expr="gte"
    )
    max_price = django_filters.NumberFilter(
        field_name="price_per_share", lookup_expr="lte"
    )

    class Meta:
        model = Offer
        fields = ["sector", "ticker", "min_price", "max_price"]
