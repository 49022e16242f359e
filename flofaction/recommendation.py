"""Service package recommendation from the intake questionnaire's answer tags."""

from typing import Iterable

from .schemas import Recommendation

# Checked in order; first tag hit wins
PACKAGES = [
    (("funding", "startup"), "Business Launchpad", ["Consulting", "Business Plan", "SBA Loan Prep"]),
    (("automation", "scale"), "Tech Scaling", ["AI Development", "Web Design", "Digital Marketing"]),
]
DEFAULT_PACKAGE = ("General Business Support", ["Tax Prep", "Notary", "Insurance"])


def recommend_package(answers: Iterable[str]) -> Recommendation:
    tags = {str(a).strip().lower() for a in answers if a}
    for keywords, package, services in PACKAGES:
        if tags.intersection(keywords):
            return Recommendation(package=package, services=services)
    package, services = DEFAULT_PACKAGE
    return Recommendation(package=package, services=services)
