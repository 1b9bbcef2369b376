"""Static domain and category tables used to classify places.

Domain entries are matched as substrings of the lower-cased hostname, so
``fb.com`` also covers ``m.fb.com``.
"""

FACEBOOK_DOMAINS = frozenset({"facebook.com", "fb.com"})
YELP_DOMAINS = frozenset({"yelp.com"})
INSTAGRAM_DOMAINS = frozenset({"instagram.com"})

SOCIAL_REVIEW_DOMAINS = frozenset({"yelp.com", "facebook.com", "fb.com", "instagram.com", "linkedin.com"})
# Hosted wordpress.com only; a self-hosted WordPress site is a real website.
SITE_BUILDER_DOMAINS = frozenset({"shopify.com", "wix.com", "squarespace.com", "weebly.com", "wordpress.com", "godaddy.com"})
ORDERING_BOOKING_DOMAINS = frozenset({"doordash.com", "ubereats.com", "grubhub.com", "opentable.com", "booksy.com", "vagaro.com"})
DIRECTORY_DOMAINS = frozenset({"yellowpages.com", "manta.com", "bbb.org", "tripadvisor.com"})

PLATFORM_DOMAINS = SOCIAL_REVIEW_DOMAINS | SITE_BUILDER_DOMAINS | ORDERING_BOOKING_DOMAINS | DIRECTORY_DOMAINS

GENERIC_CATEGORIES = frozenset(
    {
        "point_of_interest",
        "establishment",
        "business",
        "place",
        "premise",
        "store",
        "local_business",
        "general_contractor",
        "political",
        "geocode",
        "route",
        "street_address",
        "intersection",
        "street_number",
        "subpremise",
        "postal_code",
        "natural_feature",
        "floor",
        "room",
        "postal_town",
        "neighborhood",
        "locality",
        "administrative_area_level_1",
        "administrative_area_level_2",
        "administrative_area_level_3",
        "administrative_area_level_4",
        "administrative_area_level_5",
        "country",
        "sublocality",
        "sublocality_level_1",
        "sublocality_level_2",
        "sublocality_level_3",
        "sublocality_level_4",
        "sublocality_level_5",
    }
)


def host_matches(hostname: str, domains: frozenset) -> bool:
    return any(domain in hostname for domain in domains)
