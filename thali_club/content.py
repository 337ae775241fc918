"""
Static site content served by GET /api/data.

Editorial copy lives here rather than in the database; it changes with
deployments, not at runtime.
"""

from .schemas.content import (
    ChefOut,
    ContactInfoOut,
    FeatureOut,
    FooterLinkSectionOut,
    GalleryImageOut,
    HeaderLinkOut,
    MenuEntryOut,
    SiteDataResponse,
    TermsOut,
    TermsSectionOut,
    TestimonialOut,
)


HEADER_LINKS = [
    HeaderLinkOut(label="Menu", href="/#menu"),
    HeaderLinkOut(label="Contact Us", href="/#reserve"),
]

FEATURES = [
    FeatureOut(
        img_src="/images/Features/featureOne.svg",
        heading="Authentic Indian Flavors",
        subheading="Experience the taste of India with homestyle recipes and aromatic spices made fresh daily.",
    ),
    FeatureOut(
        img_src="/images/Features/featureTwo.svg",
        heading="Freshly Prepared in Our Cloud Kitchen",
        subheading=(
            "Every dish is cooked to order in our hygienic cloud kitchen, ensuring quality, "
            "freshness, and consistency."
        ),
    ),
    FeatureOut(
        img_src="/images/Features/featureThree.svg",
        heading="Customized Catering Packages",
        subheading="From corporate lunches to festive gatherings, our flexible menus fit every event and budget.",
    ),
    FeatureOut(
        img_src="/images/Features/featureFour.svg",
        heading="Seamless Ordering & Delivery",
        subheading=(
            "Order effortlessly through our online platform and enjoy on-time delivery, "
            "hot and fresh to your doorstep."
        ),
    ),
]

EXPERT_CHEFS = [
    ChefOut(name="Marco Benton", profession="Senior Chef", img_src="/images/Expert/boyone.png"),
    ChefOut(name="Elena Rivera", profession="Junior Chef", img_src="/images/Expert/girl.png"),
    ChefOut(name="John Doe", profession="Junior Chef", img_src="/images/Expert/boytwo.png"),
]

GALLERY_IMAGES = [
    GalleryImageOut(src="/images/Gallery/foodone.webp", name="Caesar Salad(187 Kcal)", price=35),
    GalleryImageOut(src="/images/Gallery/foodtwo.webp", name="Christmas salad(118 Kcal)", price=17),
    GalleryImageOut(
        src="/images/Gallery/foodthree.webp",
        name="Sauteed mushrooms with pumpkin bowl(238 kcal)",
        price=45,
    ),
    GalleryImageOut(src="/images/Gallery/foodfour.webp", name="BBQ Chicken Feast Pizza(272 kcal)", price=27),
]

FULL_MENU = [
    MenuEntryOut(
        name="Grilled Salmon",
        price="$18.99",
        description="Served with lemon butter sauce and grilled vegetables.",
    ),
    MenuEntryOut(
        name="Caesar Salad",
        price="$9.99",
        description="Crisp romaine with parmesan, croutons, and Caesar dressing.",
    ),
    MenuEntryOut(
        name="Margherita Pizza",
        price="$13.49",
        description="Classic pizza with tomato, mozzarella, and fresh basil.",
    ),
    MenuEntryOut(
        name="Tomato Basil Soup",
        price="$6.99",
        description="Creamy tomato soup with a hint of garlic and fresh basil.",
    ),
    MenuEntryOut(
        name="Chocolate Lava Cake",
        price="$7.99",
        description="Warm chocolate cake with a molten center served with vanilla ice cream.",
    ),
    MenuEntryOut(
        name="Spaghetti Carbonara",
        price="$15.25",
        description="Spaghetti tossed with eggs, pancetta, parmesan, and black pepper.",
    ),
    MenuEntryOut(
        name="Tiramisu",
        price="$8.50",
        description="Layered espresso-soaked ladyfingers with mascarpone and cocoa.",
    ),
]

FOOTER_LINKS = [
    FooterLinkSectionOut(
        section="Company",
        links=[
            HeaderLinkOut(label="Home", href="/"),
            HeaderLinkOut(label="About Us", href="/#aboutus"),
            HeaderLinkOut(label="Menu", href="/#menu"),
        ],
    ),
    FooterLinkSectionOut(
        section="Support",
        links=[
            HeaderLinkOut(label="Help/FAQ", href="/"),
            HeaderLinkOut(label="Press", href="/"),
            HeaderLinkOut(label="Affiliates", href="/"),
            HeaderLinkOut(label="Hotel owners", href="/"),
            HeaderLinkOut(label="Partners", href="/"),
        ],
    ),
]

TESTIMONIALS = [
    TestimonialOut(
        name="Aarav Mehta",
        role="Toronto",
        image="/images/avatars/user1.webp",
        quote=(
            "Veg Thali Club made our family wedding unforgettable! Every dish was bursting with "
            "authentic flavour and beautifully presented. Guests couldn't stop talking about the food!"
        ),
    ),
    TestimonialOut(
        name="Priya Sharma",
        role="Mississauga",
        image="/images/avatars/user2.webp",
        quote=(
            "Absolutely phenomenal catering service. From appetizers to desserts, every bite reflected "
            "pure passion and precision. Their team handled everything seamlessly!"
        ),
    ),
    TestimonialOut(
        name="Rohit Patel",
        role="Brampton",
        image="/images/avatars/user3.webp",
        quote=(
            "We booked Veg Thali Club for a corporate event and it was a hit! Professional setup, "
            "delicious vegetarian spread, and impeccable presentation. Highly recommend!"
        ),
    ),
    TestimonialOut(
        name="Ananya Gupta",
        role="Scarborough",
        image="/images/avatars/user4.webp",
        quote=(
            "Their catering turned our small gathering into a feast. The food was fresh, flavourful, "
            "and served with genuine warmth. The paneer dishes were everyone's favourite!"
        ),
    ),
    TestimonialOut(
        name="Rajesh Verma",
        role="Etobicoke",
        image="/images/avatars/user5.webp",
        quote=(
            "Top notch service from start to finish. The attention to detail and the taste reminded "
            "me of home cooked meals with a gourmet touch."
        ),
    ),
    TestimonialOut(
        name="Sanya Khan",
        role="Vaughan",
        image="/images/avatars/user6.webp",
        quote=(
            "We celebrated our anniversary with Veg Thali Club's catering. The thali concept was "
            "elegant, the staff were courteous, and everything went off without a hitch."
        ),
    ),
    TestimonialOut(
        name="Deepak Singh",
        role="Oakville",
        image="/images/avatars/user7.webp",
        quote=(
            "Incredible vegetarian spread! The variety, the taste, the service: everything exceeded "
            "our expectations. Perfect for our festive dinner event."
        ),
    ),
    TestimonialOut(
        name="Emily Carter",
        role="Downtown Toronto",
        image="https://randomuser.me/api/portraits/women/44.jpg",
        quote=(
            "We ordered from Veg Thali Club for our office lunch and it was a hit! The team loved the "
            "freshness and variety of dishes. We'll definitely order again soon."
        ),
    ),
    TestimonialOut(
        name="Michael Johnson",
        role="North York",
        image="https://randomuser.me/api/portraits/men/32.jpg",
        quote=(
            "I was amazed by how well organized the catering was. The delivery was punctual, the "
            "packaging perfect, and the flavours outstanding. Highly reliable service!"
        ),
    ),
    TestimonialOut(
        name="Sophie Miller",
        role="Markham",
        image="https://randomuser.me/api/portraits/women/68.jpg",
        quote=(
            "Such a wonderful experience! Every dish tasted homemade yet professional. The Veg Thali "
            "Club team made our birthday celebration so special."
        ),
    ),
    TestimonialOut(
        name="David Wilson",
        role="Richmond Hill",
        image="https://randomuser.me/api/portraits/men/15.jpg",
        quote=(
            "As someone who's not vegetarian, I was surprised at how flavourful and satisfying every "
            "item was. Veg Thali Club changed my view on vegetarian food!"
        ),
    ),
    TestimonialOut(
        name="Olivia Brown",
        role="Whitby",
        image="https://randomuser.me/api/portraits/women/22.jpg",
        quote=(
            "They made our family get together stress free. The coordination, timing, and the quality "
            "of every thali were impeccable. Highly recommend for any event!"
        ),
    ),
    TestimonialOut(
        name="James Anderson",
        role="Burlington",
        image="https://randomuser.me/api/portraits/men/71.jpg",
        quote=(
            "Fantastic service! Everything from menu planning to delivery was seamless. The flavours "
            "were rich and authentic, easily one of the best catering experiences in the GTA."
        ),
    ),
]

TERMS = TermsOut(
    title="Terms & Conditions",
    intro=(
        "Welcome to Veg Thali Club (\"we,\" \"our,\" or \"us\"). By using our website and services, "
        "you agree to comply with and be bound by the following Terms and Conditions. Please read "
        "them carefully before placing any order."
    ),
    sections=[
        TermsSectionOut(
            heading="1. Service Nature",
            body=(
                "Veg Thali Club is a vegetarian food delivery and catering facilitator powered by a "
                "network of trusted cloud kitchens and local catering partners. We ensure every meal "
                "follows our proprietary recipes and quality standards, coordinating closely with our "
                "partner kitchens to deliver fresh, authentic, and timely vegetarian dishes for every "
                "occasion."
            ),
        ),
        TermsSectionOut(
            heading="2. Food Responsibility",
            body=(
                "As we rely on third-party kitchens, we cannot guarantee or take responsibility for the "
                "quality, taste, freshness, or preparation process of food. Any issues regarding food "
                "quality should be reported to us promptly, and we will work with our partner vendors "
                "to resolve the matter."
            ),
        ),
        TermsSectionOut(
            heading="3. Allergies & Dietary Restrictions",
            body=(
                "Customers are required to inform us of any allergies, dietary restrictions, or food "
                "sensitivities before placing an order. Veg Thali Club and its partners are not liable "
                "for allergic reactions or health issues arising from failure to disclose such "
                "information."
            ),
        ),
        TermsSectionOut(
            heading="4. Orders & Payments",
            body=(
                "Orders once confirmed cannot be canceled or modified later than a 24-hour window. "
                "Payments must be completed in full before delivery. In case of payment failure or "
                "disputes, Veg Thali Club reserves the right to withhold delivery until the issue is "
                "resolved."
            ),
        ),
        TermsSectionOut(
            heading="5. Delivery Policy",
            body=(
                "We strive to deliver all orders within the estimated time. However, delays may occur "
                "due to traffic, weather, or vendor constraints. Veg Thali Club shall not be liable for "
                "delays beyond our reasonable control."
            ),
        ),
        TermsSectionOut(
            heading="6. Refunds & Cancellations",
            body=(
                "Refunds will only be issued in cases of incorrect or undelivered orders verified by "
                "our support team. Taste, portion size, or subjective dissatisfaction will not qualify "
                "for a refund."
            ),
        ),
        TermsSectionOut(
            heading="7. Limitation of Liability",
            body=(
                "Veg Thali Club, its affiliates, employees, or partners shall not be held liable for any "
                "direct or indirect damages, including but not limited to illness, injury, or losses "
                "arising from food consumption or delayed delivery."
            ),
        ),
        TermsSectionOut(
            heading="8. Third-Party Vendors",
            body=(
                "Food preparation and handling are done by third-party vendors. By placing an order, you "
                "acknowledge that Veg Thali Club is not responsible for vendor actions, negligence, or "
                "hygiene practices."
            ),
        ),
        TermsSectionOut(
            heading="9. Governing Law",
            body=(
                "These Terms shall be governed by and construed in accordance with the laws of the "
                "Province of Ontario, Canada. Any disputes shall be subject to the exclusive "
                "jurisdiction of the courts in Toronto, Ontario."
            ),
        ),
        TermsSectionOut(
            heading="10. Contact Us",
            body="For questions, concerns, or complaints, please contact us at info@vegthaliclub.com.",
        ),
    ],
    last_updated="November 2025",
)

CONTACT_INFO = ContactInfoOut(
    name="Yash Shah",
    phone="+1 (437) 987-0230",
    phone_href="tel:+1(909)235-9814",
    email="vegthaliclub@gmail.com",
    email_href="mailto:info@vegthaliclub.com",
)


def get_site_data() -> SiteDataResponse:
    """Assemble the full GET /api/data payload."""
    return SiteDataResponse(
        header=HEADER_LINKS,
        features=FEATURES,
        expert_chefs=EXPERT_CHEFS,
        gallery_images=GALLERY_IMAGES,
        full_menu=FULL_MENU,
        footer_links=FOOTER_LINKS,
        testimonials=TESTIMONIALS,
        terms=TERMS,
        contact=CONTACT_INFO,
    )
