"""
内置默认内容
首次启动或数据文件损坏时使用，作为 JSON 存储的种子数据。
"""

PROJECTS = [
    {
        'id': '1',
        'title': 'Smart Home Thermostat',
        'description': 'A user-centered thermostat design that simplifies temperature control while reducing energy consumption.',
        'category': 'industrial-design',
        'year': '2024',
        'coverImage': 'https://images.unsplash.com/photo-1690802220555-669d067fd8ec?w=1080',
        'images': ['https://images.unsplash.com/photo-1690802220555-669d067fd8ec?w=1080'],
        'role': 'Lead Industrial Designer',
        'tools': ['Rhino', 'KeyShot', 'Figma', 'Arduino'],
        'challenges': 'Users found existing thermostats confusing and often left them on default settings, wasting energy.',
        'solution': 'Designed an intuitive interface with clear visual feedback and smart learning capabilities.',
        'outcome': '40% reduction in energy waste and 95% user satisfaction in testing.',
        'contentBlocks': [
            {
                'id': '1',
                'type': 'image-text',
                'title': 'Design Process',
                'description': 'We started with extensive user research, conducting interviews with 50+ homeowners '
                               'to understand their pain points with current thermostat systems.',
                'image': 'https://images.unsplash.com/photo-1690802220555-669d067fd8ec?w=1080',
            },
            {
                'id': '2',
                'type': 'text',
                'title': 'Key Features',
                'description': 'The final design includes a minimalist interface with large, clear displays, intuitive '
                               'touch controls, and smart learning algorithms that adapt to user preferences over time.',
            },
            {
                'id': '3',
                'type': 'image',
                'image': 'https://images.unsplash.com/photo-1690802220555-669d067fd8ec?w=1080',
            },
        ],
        'link': '',
        'featured': True,
        'views': 145,
        'viewHistory': [],
    },
    {
        'id': '2',
        'title': 'Healthcare App UX Research',
        'description': 'Comprehensive user research for a telehealth platform serving elderly patients.',
        'category': 'ux-research',
        'year': '2024',
        'coverImage': 'https://images.unsplash.com/photo-1587955415524-bb264e518428?w=1080',
        'images': ['https://images.unsplash.com/photo-1587955415524-bb264e518428?w=1080'],
        'role': 'UX Researcher',
        'tools': ['Miro', 'UserTesting', 'Dovetail', 'Figma'],
        'challenges': 'Understanding accessibility needs and technology literacy barriers for senior users.',
        'solution': 'Conducted in-depth interviews, usability testing, and created detailed personas and journey maps.',
        'outcome': 'Insights led to a 60% increase in app adoption among target demographic.',
        'contentBlocks': [],
        'link': '',
        'featured': True,
        'views': 89,
        'viewHistory': [],
    },
    {
        'id': '3',
        'title': 'Ergonomic Desk Accessories',
        'description': 'A collection of sustainable desk accessories designed for remote workers.',
        'category': 'product-design',
        'year': '2023',
        'coverImage': 'https://images.unsplash.com/photo-1609921212029-bb5a28e60960?w=1080',
        'images': ['https://images.unsplash.com/photo-1609921212029-bb5a28e60960?w=1080'],
        'role': 'Product Designer',
        'tools': ['SolidWorks', 'Blender', 'Adobe CC'],
        'challenges': 'Creating affordable, sustainable products that improve workspace ergonomics.',
        'solution': 'Designed modular accessories using recycled materials with minimal assembly required.',
        'outcome': 'Product line launched successfully with 10k+ units sold in first quarter.',
        'contentBlocks': [],
        'link': '',
        'featured': False,
        'views': 62,
        'viewHistory': [],
    },
]

CATEGORIES = [
    {'id': 'industrial-design', 'label': 'Industrial Design'},
    {'id': 'ux-research', 'label': 'UX Research'},
    {'id': 'product-design', 'label': 'Product Design'},
    {'id': 'ui-design', 'label': 'UI Design'},
]

STORIES = [
    {
        'id': '1',
        'title': 'Urban Rhythms',
        'description': 'Capturing the pulse of city life through candid street photography in downtown Tokyo.',
        'coverImage': 'https://images.unsplash.com/photo-1542051841857-5f90071e7989?w=1080',
        'images': [
            'https://images.unsplash.com/photo-1513407030348-c983a97b98d8?w=800',
            'https://images.unsplash.com/photo-1547981609-4b6bfe67ca0b?w=800',
        ],
        'category': 'Street Photography',
        'location': 'Tokyo, Japan',
        'date': '2024-11-15',
        'content': 'Walking through the neon-lit streets of Shibuya at night, I found myself immersed in a world '
                   'where tradition meets modernity. Every corner tells a story.',
        'contentBlocks': [
            {
                'id': '1-1',
                'type': 'text',
                'title': 'The Night Streets',
                'description': 'Tokyo after dark transforms into a different world.',
            },
            {
                'id': '1-2',
                'type': 'image-text',
                'title': 'Shibuya Crossing',
                'description': 'The iconic scramble crossing becomes a stage where thousands of stories unfold simultaneously.',
                'image': 'https://images.unsplash.com/photo-1542051841857-5f90071e7989?w=800',
            },
        ],
        'views': 245,
        'viewHistory': [],
    },
    {
        'id': '2',
        'title': 'Mountain Solitude',
        'description': 'A journey through the remote peaks of the Swiss Alps, documenting the raw beauty of untouched nature.',
        'coverImage': 'https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=1080',
        'images': [
            'https://images.unsplash.com/photo-1464822759023-fed622ff2c3b?w=800',
            'https://images.unsplash.com/photo-1519904981063-b0cf448d479e?w=800',
        ],
        'category': 'Landscape',
        'location': 'Swiss Alps, Switzerland',
        'date': '2024-10-05',
        'content': 'Three days of hiking above the clouds, where the only sounds were wind and footsteps.',
        'contentBlocks': [
            {
                'id': '2-1',
                'type': 'image',
                'image': 'https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800',
            },
        ],
        'views': 189,
        'viewHistory': [],
    },
]

ABOUT = {
    'heroTitle': 'About Me',
    'heroParagraphs': [
        "I'm a passionate industrial designer and UX researcher with over 8 years of experience creating "
        "products that balance aesthetics, functionality, and user needs.",
        'My work spans from physical product design to digital experiences, always with a focus on '
        'human-centered design principles.',
    ],
    'heroImage': 'https://images.unsplash.com/photo-1609921212029-bb5a28e60960?w=1080',
    'skills': [
        {
            'title': 'Industrial Design',
            'items': [
                'Product Design & Development',
                '3D Modeling & Rendering',
                'Prototyping & Manufacturing',
                'Material Selection',
            ],
        },
        {
            'title': 'UX Research',
            'items': [
                'User Interviews & Testing',
                'Journey Mapping',
                'Persona Development',
                'Usability Analysis',
            ],
        },
    ],
    'tools': [
        {
            'title': 'Creative Pursuits',
            'items': [
                'Travel sketching & watercolor journaling',
                'Street and landscape photography',
            ],
        },
    ],
    'workExperience': [
        {'title': 'Lead Industrial Designer', 'subtitle': 'Studio Form - 2019 to Present'},
        {'title': 'UX Research Fellow', 'subtitle': 'Human-Centered Design Lab - 2016 to 2019'},
    ],
    'education': [
        {'title': 'Master of Industrial Design', 'subtitle': 'Design University, 2018'},
        {'title': 'UX Research Certification', 'subtitle': 'Nielsen Norman Group, 2020'},
    ],
}

CONTACT = {
    'title': 'Get in Touch',
    'subtitle': "Have a project in mind or want to collaborate? I'd love to hear from you.",
    'connectHeading': "Let's Connect",
    'connectDescription': "I'm always open to discussing new projects, creative ideas, or opportunities "
                          "to be part of your visions.",
    'email': {'label': 'Email', 'address': 'hello@example.com'},
    'phone': {'label': 'Phone', 'number': '+852 0000 0000'},
    'socials': [
        {'type': 'linkedin', 'label': 'LinkedIn', 'url': 'https://linkedin.com', 'description': 'Connect with me'},
        {'type': 'github', 'label': 'GitHub', 'url': 'https://github.com', 'description': 'See my code'},
    ],
}

# db.json 的默认内容
DEFAULT_META = {
    'categories': CATEGORIES,
    'messages': [],
    'bannedIps': [],
    'about': ABOUT,
    'contact': CONTACT,
    'adminPasswordHash': None,
}
