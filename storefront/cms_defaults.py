# Default content for each editable marketing page. Stored pages override
# these section by section (see content_editor.merge_with_defaults).

HOME_PAGE = {
    "seo": {
        "title": "Dipak Furniture | Office Furniture Manufacturer in Ahmedabad",
        "description": "Ergonomic office chairs, steel almirahs, school and institutional furniture made in Ahmedabad since 1998.",
    },
    "hero_section": {
        "title": "Office Furniture Built for Indian Workspaces",
        "subtitle": "Ergonomic seating, storage and institutional furniture from Ahmedabad.",
    },
    "welcome_section": {
        "heading": "Welcome to Dipak Furniture",
        "description": "For over 25 years we have manufactured furniture for offices, schools, hospitals and government organisations across India.",
    },
}

ABOUT_PAGE = {
    "hero": {
        "heading": "About Dipak Furniture – Office Furniture Manufacturer Since 1998",
        "subheading": "Crafting premium office and institutional furniture for Indian workspaces for over 25 years.",
    },
    "who_we_are": {
        "heading": "Who We Are",
        "paragraph1": "<strong>Dipak Furniture</strong> is an office furniture manufacturer in Ahmedabad, Gujarat, with over 25 years of experience.",
        "paragraph2": "Our manufacturing facility combines traditional craftsmanship with modern technology, and every piece is quality checked before it leaves the factory.",
        "paragraph3": "We focus on ergonomic design, premium materials and attention to detail in everything we create.",
    },
    "vision": {
        "title": "Our Vision",
        "description": "To be India's most trusted office furniture brand.",
    },
    "mission": {
        "title": "Our Mission",
        "description": "To design and manufacture furniture that combines comfort, durability and aesthetics at fair prices.",
    },
    "core_values": [
        {"title": "Integrity", "description": "Honest dealings and transparent business practices in every interaction."},
        {"title": "Quality", "description": "Uncompromising standards in materials, craftsmanship, and finish."},
        {"title": "Customer Focus", "description": "Your satisfaction is our primary measure of success."},
        {"title": "Innovation", "description": "Continuously improving designs for better comfort and functionality."},
    ],
    "manufacturing": {
        "heading": "Manufacturing Excellence in Ahmedabad",
        "description": "Our facility is equipped with modern machinery and staffed by skilled craftsmen.",
        "stats": [
            {"value": "25+", "label": "Years of Experience"},
            {"value": "10,000+", "label": "Satisfied Clients"},
            {"value": "50,000+", "label": "Products Delivered"},
        ],
    },
    "cta": {
        "heading": "Ready to Furnish Your Workspace?",
        "subheading": "Contact us for personalized recommendations and competitive quotes on bulk orders.",
    },
}

PHILOSOPHY_PAGE = {
    "hero": {
        "heading": "Our Design Philosophy – Ergonomic Office Furniture",
        "subheading": "Where sustainability meets ergonomics for smarter, healthier workspaces.",
    },
    "eco_ergo": {
        "description": "Our design philosophy combines eco-friendly materials with ergonomic engineering.",
    },
    "eco_design": {
        "heading": "Eco-Conscious Design",
        "points": [
            "Sustainable materials sourced from responsible suppliers",
            "Low-VOC finishes and environmentally safe adhesives",
            "Durable construction that reduces replacement frequency",
            "Recyclable components and minimal packaging waste",
        ],
    },
    "ergo_design": {
        "heading": "Ergonomic Excellence – Best Office Chairs for Long Hours",
        "points": [
            "Scientifically designed for proper posture support",
            "Adjustable features to accommodate different body types",
            "Lumbar support and pressure distribution for all-day comfort",
            "Reduces fatigue and prevents work-related strain injuries",
        ],
    },
    "indian_workspaces": {
        "heading": "Designed for Indian Workspaces",
        "paragraph1": "Indian offices face varied climate conditions, diverse body types and heavy daily use.",
        "paragraph2": "Our <strong>ergonomic office chairs</strong> are engineered for these conditions.",
        "paragraph3": "From a startup in Bangalore to a school in Bihar, our furniture is built to perform.",
        "stats": [
            {"value": "28+", "label": "States Served"},
            {"value": "All Climates", "label": "Tested & Proven"},
            {"value": "ISO", "label": "Quality Standards"},
            {"value": "5 Year", "label": "Warranty Support"},
        ],
    },
}

MATERIALS_PAGE = {
    "hero": {
        "heading": "Materials We Trust",
        "subheading": "Premium steel, engineered wood, mesh and fabrics chosen for long service life.",
    },
    "materials_intro": {
        "heading": "Built From the Right Materials",
        "description": "Every material is sourced from verified suppliers and tested for durability before production.",
    },
    "cta": {
        "heading": "Need Help Choosing?",
        "subheading": "Talk to our team about finishes and materials for your project.",
    },
}

QUALITY_PAGE = {
    "hero": {
        "heading": "Quality & Trust – Our Manufacturing Promise",
        "subheading": "Our commitment to excellence is reflected in every piece we manufacture.",
    },
    "quality_promise": {
        "heading": "Our Quality Promise",
        "description": "From raw materials to final delivery, quality is embedded in every step of our process.",
    },
    "quality_points": [
        {"title": "Rigorous Testing", "description": "Every product undergoes durability and safety testing."},
        {"title": "Quality Control", "description": "Multi-stage checks ensure consistent standards."},
        {"title": "Premium Materials", "description": "High-grade materials from trusted suppliers."},
        {"title": "Safe Delivery", "description": "Careful packaging and handling."},
        {"title": "Long Lifespan", "description": "Built to last with minimal maintenance."},
        {"title": "Warranty Support", "description": "Comprehensive warranty with responsive after-sales support."},
    ],
    "trust_stats": [
        {"value": "25+", "label": "Years in Business"},
        {"value": "10,000+", "label": "Happy Clients"},
        {"value": "98%", "label": "Customer Satisfaction"},
        {"value": "5 Years", "label": "Warranty Coverage"},
    ],
    "testimonials_heading": {
        "heading": "What Our Clients Say",
        "subheading": "Trusted by offices, schools, hospitals, and institutions across India.",
    },
    "testimonials": [
        {"quote": "Their quality and service are unmatched in the industry.", "author": "Rajesh Sharma", "company": "ABC Corporation, Ahmedabad"},
        {"quote": "The durability has been exceptional even with heavy student use.", "author": "Dr. Meera Patel", "company": "Sunshine School, Gandhinagar"},
    ],
    "cta": {
        "heading": "Experience the Dipak Furniture Difference",
        "subheading": "Get in touch today for a free quote.",
    },
}

CONTACT_PAGE = {
    "hero": {
        "heading": "Contact Dipak Furniture – Office Furniture Shop in Ahmedabad",
        "subheading": "Get in touch for enquiries, quotes, or visit our showroom.",
    },
    "contact_info": {
        "heading": "Get In Touch – Office Furniture Near You",
        "description": "Reach out through any of the channels below or fill out the contact form.",
    },
    "address": {
        "line1": "Plot-4, No. 2 Bhagirath Estate,",
        "line2": "Opp. Jawaharnagar, Near Gulabnagar Char Rasta,",
        "line3": "Amraiwadi, Ahmedabad, Gujarat – 380026",
    },
    "business_hours": {
        "weekdays": "Monday - Saturday: 9:00 AM - 7:00 PM",
        "sunday": "Sunday: Closed",
    },
    "map_heading": "Visit Our Office Furniture Showroom in Ahmedabad",
    "form_heading": "Request a Free Quote",
}

PAGE_DEFAULTS = {
    "home_page": HOME_PAGE,
    "about_page": ABOUT_PAGE,
    "philosophy_page": PHILOSOPHY_PAGE,
    "materials_page": MATERIALS_PAGE,
    "quality_page": QUALITY_PAGE,
    "contact_page": CONTACT_PAGE,
}
