"""
Site Content Schemas
====================

Response models for GET /api/data, the static data the marketing pages are
rendered from.
"""

from typing import List

from pydantic import BaseModel


class HeaderLinkOut(BaseModel):
    label: str
    href: str


class FeatureOut(BaseModel):
    img_src: str
    heading: str
    subheading: str


class ChefOut(BaseModel):
    name: str
    profession: str
    img_src: str


class GalleryImageOut(BaseModel):
    src: str
    name: str
    price: int


class MenuEntryOut(BaseModel):
    name: str
    price: str
    description: str


class FooterLinkSectionOut(BaseModel):
    section: str
    links: List[HeaderLinkOut]


class TestimonialOut(BaseModel):
    name: str
    role: str  # neighbourhood or city
    image: str
    quote: str


class TermsSectionOut(BaseModel):
    heading: str
    body: str


class TermsOut(BaseModel):
    title: str
    intro: str
    sections: List[TermsSectionOut]
    last_updated: str


class ContactInfoOut(BaseModel):
    name: str
    phone: str
    phone_href: str
    email: str
    email_href: str


class SiteDataResponse(BaseModel):
    """Everything the site's pages need in one payload."""
    header: List[HeaderLinkOut]
    features: List[FeatureOut]
    expert_chefs: List[ChefOut]
    gallery_images: List[GalleryImageOut]
    full_menu: List[MenuEntryOut]
    footer_links: List[FooterLinkSectionOut]
    testimonials: List[TestimonialOut]
    terms: TermsOut
    contact: ContactInfoOut
