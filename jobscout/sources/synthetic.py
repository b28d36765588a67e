"""Synthetic listing boards.

Each board fabricates plausible postings from its own title and description
templates. Companies come from a mixed Indian/international slice; the pool
a company belongs to decides its location and salary currency.
"""
from __future__ import annotations

import random
import time

from jobscout.log import get_logger
from jobscout.models import Job
from jobscout.sources.base import JobSource, TimeFilter

log = get_logger(__name__)

INDIAN_COMPANIES = (
    "Tata Consultancy Services", "Infosys", "Wipro", "HCL Technologies", "Tech Mahindra",
    "Cognizant", "Accenture India", "IBM India", "Microsoft India", "Google India",
    "Amazon India", "Flipkart", "Paytm", "Zomato", "Swiggy", "Ola", "Uber India",
    "PhonePe", "BYJU'S", "Unacademy", "Vedantu", "Freshworks", "Zoho", "InMobi",
    "Razorpay", "CRED", "Dream11", "Nykaa", "BigBasket", "PolicyBazaar", "MakeMyTrip",
)

INTERNATIONAL_COMPANIES = (
    "Google", "Microsoft", "Amazon", "Meta", "Apple", "Netflix", "Tesla", "SpaceX",
    "Spotify", "Uber", "Airbnb", "Stripe", "Shopify", "Atlassian", "Slack", "Zoom",
    "Dropbox", "GitHub", "GitLab", "Docker", "MongoDB", "Snowflake", "Databricks",
)

INDIAN_LOCATIONS = (
    "Bangalore", "Mumbai", "Delhi", "Hyderabad", "Chennai", "Pune", "Kolkata",
    "Gurgaon", "Noida", "Ahmedabad", "Kochi", "Jaipur", "Chandigarh", "Coimbatore",
)

INTERNATIONAL_LOCATIONS = (
    "San Francisco, CA", "New York, NY", "Seattle, WA", "Austin, TX", "Boston, MA",
    "Chicago, IL", "London, UK", "Berlin, Germany", "Amsterdam, Netherlands",
    "Toronto, Canada", "Sydney, Australia", "Singapore", "Dublin, Ireland", "Remote",
)

INR_SALARIES = (
    "₹3,00,000 - ₹6,00,000", "₹6,00,000 - ₹12,00,000", "₹8,00,000 - ₹15,00,000",
    "₹12,00,000 - ₹25,00,000", "₹20,00,000 - ₹40,00,000", "Competitive", "Not specified",
)

USD_SALARIES = (
    "$60,000 - $80,000", "$80,000 - $120,000", "$100,000 - $150,000",
    "$120,000 - $180,000", "$150,000 - $200,000", "Competitive", "Not specified",
)

BASE_TAGS = ("Full-time", "Remote", "Benefits")

# First matching keyword wins, so more specific keys come first.
KEYWORD_TAGS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("software engineer", ("JavaScript", "Python", "React", "Node.js", "AWS")),
    ("frontend", ("React", "Vue.js", "Angular", "TypeScript", "CSS")),
    ("backend", ("Node.js", "Python", "Java", "PostgreSQL", "Docker")),
    ("fullstack", ("React", "Node.js", "MongoDB", "Express", "TypeScript")),
    ("data", ("Python", "SQL", "Machine Learning", "Pandas", "TensorFlow")),
    ("devops", ("AWS", "Docker", "Kubernetes", "CI/CD", "Terraform")),
    ("mobile", ("React Native", "Flutter", "iOS", "Android", "Swift")),
    ("intern", ("Entry Level", "Training", "Mentorship", "Learning")),
)

_MAX_DAYS = {
    TimeFilter.LAST_24_HOURS: 1,
    TimeFilter.LAST_WEEK: 7,
    TimeFilter.LAST_MONTH: 30,
    TimeFilter.ANY_TIME: 14,
}


def pick_location(preferred: str, indian: bool, rng: random.Random) -> str:
    """The caller's location wins unless it is blank or "any"."""
    preferred = (preferred or "").strip()
    if preferred and preferred.lower() != "any":
        return preferred
    return rng.choice(INDIAN_LOCATIONS if indian else INTERNATIONAL_LOCATIONS)


def make_tags(term: str) -> list[str]:
    lowered = term.lower()
    specific: tuple[str, ...] = ()
    for keyword, tags in KEYWORD_TAGS:
        if keyword in lowered:
            specific = tags
            break
    return [*BASE_TAGS, *specific[:3]]


def make_salary(indian: bool, rng: random.Random) -> str:
    return rng.choice(INR_SALARIES if indian else USD_SALARIES)


def posted_date(time_filter: TimeFilter, rng: random.Random) -> str:
    if time_filter == TimeFilter.LAST_HOUR:
        return "Posted 1 hour ago"
    days = rng.randint(1, _MAX_DAYS.get(time_filter, 14))
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days == 7:
        return "1 week ago"
    return f"{days // 7} weeks ago"


class SyntheticBoard(JobSource):
    """Generates ``count`` postings per search from the class templates.

    Subclasses set the templates; ``{term}`` is filled with the search term.
    """

    name = "synthetic"
    count = 0
    titles: tuple[str, ...] = ()
    descriptions: tuple[str, ...] = ()
    companies: tuple[str, ...] = ()
    url_template = "https://example.com/jobs/{key}"

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def search(self, term: str, location: str, time_filter: TimeFilter = TimeFilter.ANY_TIME) -> list[Job]:
        term = term.strip() or "Professional"
        stamp = int(time.time() * 1000)
        tags = make_tags(term)
        jobs = []
        for i in range(self.count):
            company = self.rng.choice(self.companies)
            indian = company in INDIAN_COMPANIES
            jobs.append(
                Job(
                    id=f"{self.name}-{i}-{stamp}",
                    title=self.titles[i % len(self.titles)].format(term=term),
                    company=company,
                    location=pick_location(location, indian, self.rng),
                    description=self.descriptions[i % len(self.descriptions)].format(term=term),
                    tags=list(tags),
                    salary=make_salary(indian, self.rng),
                    posted_date=posted_date(time_filter, self.rng),
                    source_url=self.url_template.format(key=f"job{i}{stamp}"),
                )
            )
        log.debug("[%s] generated %d jobs for %r", self.name, len(jobs), term)
        return jobs


class IndeedBoard(SyntheticBoard):
    name = "indeed"
    count = 6
    companies = INDIAN_COMPANIES[0:15] + INTERNATIONAL_COMPANIES[0:10]
    url_template = "https://www.indeed.com/viewjob?jk={key}"
    titles = (
        "{term} Developer",
        "Senior {term}",
        "Junior {term}",
        "{term} Engineer",
        "Full Stack {term}",
        "Lead {term}",
        "{term} Specialist",
        "Principal {term}",
    )
    descriptions = (
        "We are looking for a talented {term} to join our dynamic team. You will build high-quality "
        "software and work with modern frameworks and cloud platforms.",
        "Join our team as a {term}! Work on products used by millions, collaborate with talented "
        "engineers and grow quickly. Competitive compensation.",
        "Seeking an experienced {term} to help scale our platform on microservices, containers "
        "and cloud infrastructure.",
        "We're hiring a {term} to build scalable solutions in a fast-growing team. "
        "Remote work options available.",
        "Looking for a passionate {term} to join engineering, mentor junior developers and shape "
        "our products. Excellent benefits.",
        "Opportunity for a {term} to work with the latest technologies alongside cross-functional "
        "teams. Flexible hours and a learning budget.",
    )


class LinkedInBoard(SyntheticBoard):
    name = "linkedin"
    count = 5
    companies = INDIAN_COMPANIES[5:15] + INTERNATIONAL_COMPANIES[5:15]
    url_template = "https://www.linkedin.com/jobs/view/{key}"
    titles = (
        "{term} Professional",
        "{term} Consultant",
        "Senior {term} Manager",
        "{term} Lead",
        "{term} Architect",
        "{term} Specialist",
    )
    descriptions = (
        "Join our professional services team as a {term} working with enterprise clients. "
        "Strong analytical and problem-solving skills required.",
        "We're seeking a {term} to drive digital transformation initiatives. Enterprise software "
        "and cloud experience preferred.",
        "Work as a {term} on high-impact projects with global teams. Competitive package offered.",
        "Looking for a {term} to lead technical initiatives and mentor the team. Agile "
        "experience required.",
        "Help shape our technology strategy as a {term}. Remote work options available.",
    )


class GlassdoorBoard(SyntheticBoard):
    name = "glassdoor"
    count = 4
    companies = INDIAN_COMPANIES[10:20] + INTERNATIONAL_COMPANIES[10:15]
    url_template = "https://www.glassdoor.com/job-listing/{key}"
    titles = (
        "{term} Analyst",
        "{term} Coordinator",
        "{term} Manager",
        "{term} Director",
        "{term} Associate",
    )
    descriptions = (
        "Join us as a {term} and help build the future of work with data analytics and modern "
        "development practices.",
        "We're looking for a {term} to improve our platform and user engagement. Flexible "
        "working arrangements.",
        "Work as a {term} on product development and user research with cross-functional teams.",
        "Seeking a {term} to join our growing team with room for professional growth.",
    )


def default_boards(rng: random.Random | None = None) -> list[SyntheticBoard]:
    return [IndeedBoard(rng), LinkedInBoard(rng), GlassdoorBoard(rng)]
