"""Tests for committee slug and URL generation."""
import pytest

from senate_sync.models import SourceCommittee
from senate_sync.slugs import build_committee_fields, slugify_committee_name

NY_SENATE_COMMITTEES = [
    'Aging',
    'Agriculture',
    'Alcoholism and Substance Use Disorders',
    'Banks',
    'Budget and Revenue',
    'Children and Families',
    'Cities 1',
    'Cities 2',
    'Civil Service and Pensions',
    'Codes',
    'Commerce, Economic Development and Small Business',
    'Consumer Protection',
    'Corporations, Authorities and Commissions',
    'Crime Victims, Crime and Correction',
    'Cultural Affairs, Tourism, Parks and Recreation',
    'Disabilities',
    'Education',
    'Elections',
    'Energy and Telecommunications',
    'Environmental Conservation',
    'Ethics and Internal Governance',
    'Finance',
    'Health',
    'Higher Education',
    'Housing, Construction and Community Development',
    'Insurance',
    'Internet and Technology',
    'Investigations and Government Operations',
    'Judiciary',
    'Labor',
    'Local Government',
    'Mental Health',
    'Procurement and Contracts',
    'Racing, Gaming and Wagering',
    'Rules',
    'Social Services',
    'Transportation',
    "Veterans, Homeland Security and Military Affairs",
    "Women's Issues",
]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Health", "health"),
        ("Health & Human Services", "health-human-services"),
        ("Health  Human Services!", "health-human-services"),
        ("Crime Victims, Crime and Correction", "crime-victims-crime-and-correction"),
        ("  Leading and trailing  ", "leading-and-trailing"),
        ("Women's Issues", "womens-issues"),
        ("Cities 1 - New York City", "cities-1-new-york-city"),
        ("Tabs\tand\nNewlines", "tabs-and-newlines"),
        ("--Hyphen--Runs--", "hyphen-runs"),
        ("Énergie", "nergie"),
        ("!!!", ""),
        ("", ""),
    ]
)
def test_slugify_committee_name(name, expected):
    assert slugify_committee_name(name) == expected


@pytest.mark.parametrize("name", NY_SENATE_COMMITTEES + ["Health & Human Services", "--x--"])
def test_slugify_is_idempotent(name):
    slug = slugify_committee_name(name)
    assert slugify_committee_name(slug) == slug


def test_no_collisions_across_committee_names():
    slugs = [slugify_committee_name(name) for name in NY_SENATE_COMMITTEES]
    assert len(set(slugs)) == len(NY_SENATE_COMMITTEES)


def test_punctuation_variants_collide_only_when_normalized_names_match():
    assert slugify_committee_name("Health & Human Services") == slugify_committee_name("Health  Human Services!")
    assert slugify_committee_name("Health & Human Services") != slugify_committee_name("Health and Human Services")


def test_build_committee_fields_prefixes_slug_but_not_url():
    slug, url = build_committee_fields(SourceCommittee(name="Health & Human Services"))
    assert slug == "senate-health-human-services"
    assert url == "https://www.nysenate.gov/committees/health-human-services"


def test_build_committee_fields_is_deterministic():
    committee = SourceCommittee(name="Racing, Gaming and Wagering")
    assert build_committee_fields(committee) == build_committee_fields(committee)
