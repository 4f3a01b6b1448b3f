"""Shared fixtures: a complete raw document, raw projects and a recording notifier."""

import copy

import pytest

from folio.utils.notifications import RecordingNotifier

FULL_DOCUMENT = {
    "user": "64f1c0ffee",
    "hero": {
        "title": "Ada Lovelace",
        "subtitle": "Analytical engines and other machines",
        "backgroundImage": "https://example.com/hero.jpg",
        "backgroundColor": "#112233",
        "ctaText": "See the Work",
        "ctaLink": "#projects",
    },
    "about": {
        "title": "About Ada",
        "bio": "Mathematician and writer.",
        "skills": ["Mathematics", "Algorithms", "Poetry"],
        "image": "https://example.com/ada.png",
    },
    "contact": {
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "linkedin": "https://linkedin.com/in/ada",
        "github": "https://github.com/ada",
        "location": "London",
    },
    "customization": {
        "primaryColor": "#3B82F6",
        "secondaryColor": "#1E40AF",
        "fontFamily": "Georgia",
        "layout": "modern",
        "spacing": "comfortable",
    },
    "theme": "light",
    "isPublic": True,
    "views": 12,
    "testimonials": [
        {"name": "Charles", "content": "Remarkable.", "company": "Engines Ltd", "rating": 5},
    ],
}

PROJECTS = [
    {
        "_id": "p1",
        "title": "Note G",
        "description": "Bernoulli numbers on the Analytical Engine.",
        "technologies": ["Punch cards", "Mathematics"],
        "githubUrl": "https://github.com/ada/note-g",
        "liveUrl": "https://ada.example.com/note-g",
    },
    {
        "_id": "p2",
        "title": "Translation",
        "description": "Menabrea's memoir, annotated.",
        "technologies": [],
        "githubUrl": "",
    },
]


@pytest.fixture
def full_document():
    return copy.deepcopy(FULL_DOCUMENT)


@pytest.fixture
def raw_projects():
    return copy.deepcopy(PROJECTS)


@pytest.fixture
def notifier():
    return RecordingNotifier()
