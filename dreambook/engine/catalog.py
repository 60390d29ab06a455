"""Static dream template catalog — no DB, config only.

Templates seed the Discover recommendations and carry a fixed insight
string. Skill and interest tags are lowercase so they can be intersected
directly with a normalized profile.
"""

from __future__ import annotations

from dataclasses import dataclass

from dreambook.engine.models import DreamCategory, DreamMood


@dataclass(frozen=True, slots=True)
class DreamTemplate:
    title: str
    description: str
    category: DreamCategory
    mood: DreamMood
    suggested_steps: tuple[str, ...]
    relevant_skills: frozenset[str]
    relevant_interests: frozenset[str]
    min_age: int
    max_age: int  # inclusive
    insight: str

    def fits_age(self, age: int) -> bool:
        return self.min_age <= age <= self.max_age


def _t(
    title: str,
    description: str,
    category: DreamCategory,
    mood: DreamMood,
    steps: list[str],
    skills: set[str],
    interests: set[str],
    ages: tuple[int, int],
    insight: str,
) -> DreamTemplate:
    return DreamTemplate(
        title=title,
        description=description,
        category=category,
        mood=mood,
        suggested_steps=tuple(steps),
        relevant_skills=frozenset(skills),
        relevant_interests=frozenset(interests),
        min_age=ages[0],
        max_age=ages[1],
        insight=insight,
    )


C = DreamCategory
M = DreamMood

# Order matters: equal scores keep this order in suggestions.
TEMPLATES: tuple[DreamTemplate, ...] = (
    _t(
        "Launch a Side Business",
        "Turn your passion into a profitable venture. Start small, think big, and build something meaningful.",
        C.career, M.exciting,
        ["Identify your niche and target market", "Create a business plan", "Build a minimum viable product",
         "Set up online presence", "Launch and get first customers", "Iterate based on feedback"],
        {"marketing", "leadership", "communication", "design", "programming"},
        {"business", "technology"},
        (16, 55),
        "Entrepreneurship aligns with your creative and leadership skills. "
        "Starting small reduces risk while building real-world experience.",
    ),
    _t(
        "Earn a Professional Certification",
        "Level up your career with a recognized certification in your field.",
        C.career, M.neutral,
        ["Research certifications in your field", "Choose exam and register", "Create a study schedule",
         "Complete practice tests", "Pass the certification exam"],
        {"analytics", "problem solving", "engineering"},
        {"education", "business", "technology"},
        (18, 50),
        "Certifications signal expertise and commitment. "
        "They open doors to roles that value proven, structured knowledge.",
    ),
    _t(
        "Master Public Speaking",
        "Overcome stage fright and become a confident, compelling speaker.",
        C.career, M.exciting,
        ["Join a speaking group or club", "Prepare a 5-minute talk", "Practice in front of friends",
         "Give a talk at a local event", "Seek feedback and refine your style"],
        {"communication", "leadership", "public speaking"},
        {"business", "education"},
        (14, 60),
        "Public speaking is one of the most transferable skills. "
        "Mastering it amplifies every other professional ability you have.",
    ),
    _t(
        "Land Your Dream Job",
        "Position yourself for the career you've always wanted through strategic preparation.",
        C.career, M.joyful,
        ["Define your ideal role and company", "Update resume and portfolio", "Network with industry professionals",
         "Prepare for interviews", "Apply to target companies", "Negotiate your offer"],
        {"communication", "leadership", "problem solving"},
        {"business"},
        (18, 45),
        "Strategic career moves require clarity about what you want. "
        "Define the destination first, then reverse-engineer the path.",
    ),
    _t(
        "Run a Half Marathon",
        "Challenge yourself physically and mentally by training for and completing a half marathon.",
        C.health, M.exciting,
        ["Get a health checkup", "Start with a couch-to-5K plan", "Build up weekly mileage",
         "Complete a 10K race", "Follow a half marathon training plan", "Race day: finish strong!"],
        {"fitness"},
        {"sports", "health"},
        (14, 55),
        "Endurance training builds mental resilience as much as physical strength. "
        "The discipline transfers to every area of life.",
    ),
    _t(
        "Develop a Daily Meditation Practice",
        "Find inner calm and clarity through a consistent meditation routine.",
        C.health, M.peaceful,
        ["Start with 5 minutes daily", "Try different meditation styles", "Build up to 15 minutes",
         "Create a dedicated meditation space", "Maintain a 30-day streak"],
        set(),
        {"health", "psychology"},
        (12, 70),
        "Meditation rewires your brain for focus and emotional regulation. "
        "Even 5 minutes daily creates measurable cognitive benefits.",
    ),
    _t(
        "Master Healthy Cooking",
        "Learn to prepare nutritious, delicious meals that fuel your body and delight your taste buds.",
        C.health, M.joyful,
        ["Learn 5 basic cooking techniques", "Plan weekly meal prep", "Master 10 healthy recipes",
         "Experiment with global cuisines", "Cook a healthy dinner party"],
        {"cooking"},
        {"food", "health"},
        (14, 65),
        "Cooking is a creative act with immediate rewards. "
        "Mastering it gives you control over your health and brings people together.",
    ),
    _t(
        "Learn a New Language",
        "Open doors to new cultures and connections by becoming conversational in another language.",
        C.education, M.mysterious,
        ["Choose your target language", "Start with basics and pronunciation", "Practice daily for 20 minutes",
         "Find a language exchange partner", "Watch shows in that language", "Have a 10-minute conversation"],
        {"languages", "communication"},
        {"travel", "education"},
        (10, 70),
        "Language learning reshapes how you think. "
        "Bilingual minds show enhanced problem-solving and cognitive flexibility.",
    ),
    _t(
        "Read 30 Books This Year",
        "Expand your mind and perspective through a dedicated reading challenge.",
        C.education, M.peaceful,
        ["Create a reading list", "Set aside 30 minutes daily for reading", "Join a book club",
         "Mix fiction and non-fiction", "Track and review each book", "Share your favorites with friends"],
        {"writing"},
        {"reading", "education"},
        (12, 70),
        "Reading is compound interest for your mind. "
        "Each book adds context and depth to everything that follows.",
    ),
    _t(
        "Master a Musical Instrument",
        "Express yourself through music by learning to play an instrument you love.",
        C.creative, M.joyful,
        ["Choose your instrument", "Find a teacher or course", "Practice 20 minutes daily",
         "Learn 5 songs you love", "Perform for friends or family", "Join a jam session or band"],
        {"music"},
        {"music"},
        (10, 70),
        "Musical training strengthens neural connections across your entire brain. "
        "It's one of the few activities that engages every cognitive system simultaneously.",
    ),
    _t(
        "Create a Digital Art Portfolio",
        "Build a stunning collection of digital artwork that showcases your unique style.",
        C.creative, M.surreal,
        ["Learn digital art fundamentals", "Choose your tools and software", "Create 10 portfolio pieces",
         "Develop a consistent style", "Build an online portfolio", "Share on art communities"],
        {"art", "design", "photography"},
        {"art", "technology"},
        (12, 55),
        "Digital art removes traditional barriers to creative expression. "
        "Your portfolio becomes a living document of your creative evolution.",
    ),
    _t(
        "Start a Photography Project",
        "Tell visual stories through a focused photography project that pushes your creative boundaries.",
        C.creative, M.peaceful,
        ["Define your project theme", "Learn composition techniques", "Shoot weekly",
         "Edit and curate best shots", "Create a photo series", "Display or publish your work"],
        {"photography", "art", "design"},
        {"photography", "art", "nature", "travel"},
        (12, 65),
        "Photography trains you to see beauty in the ordinary. "
        "A focused project gives your creative eye direction and purpose.",
    ),
    _t(
        "Plan a Dream Vacation",
        "Design and experience the trip of a lifetime to a place you've always wanted to visit.",
        C.travel, M.exciting,
        ["Choose your dream destination", "Research best times to visit", "Create a savings plan",
         "Book flights and accommodation", "Plan your itinerary", "Go and make memories!"],
        set(),
        {"travel"},
        (18, 70),
        "Travel expands your worldview more than any book or course. "
        "The planning itself is part of the adventure.",
    ),
    _t(
        "Build an Emergency Fund",
        "Create financial security with 3-6 months of expenses saved for unexpected situations.",
        C.financial, M.neutral,
        ["Calculate monthly expenses", "Set a target savings amount", "Open a high-yield savings account",
         "Automate monthly transfers", "Cut unnecessary expenses", "Reach your savings goal"],
        {"analytics", "finance"},
        {"business"},
        (18, 60),
        "Financial security isn't about wealth, it's about freedom. "
        "An emergency fund removes the anxiety that blocks creative thinking.",
    ),
    _t(
        "Journal Every Day",
        "Develop self-awareness and clarity through a daily journaling practice.",
        C.personal_growth, M.peaceful,
        ["Choose a journal format", "Write at the same time daily", "Start with gratitude entries",
         "Reflect on weekly progress", "Complete a 60-day streak"],
        {"writing"},
        {"psychology", "health"},
        (12, 70),
        "Journaling externalizes your thoughts, making patterns visible that are invisible in your mind. "
        "It's therapy you give yourself.",
    ),
    _t(
        "Build a Powerful Morning Routine",
        "Start every day with intention and energy through a carefully crafted morning ritual.",
        C.personal_growth, M.exciting,
        ["Wake up 30 minutes earlier", "Add exercise or stretching", "Include mindfulness or meditation",
         "Plan your top 3 priorities", "Maintain for 30 consecutive days"],
        {"fitness"},
        {"health", "psychology"},
        (14, 70),
        "Your morning routine sets the trajectory for your entire day. "
        "Winning the morning means winning the day.",
    ),
    _t(
        "Build Your First App",
        "Bring your ideas to life by learning to build a mobile or web application from scratch.",
        C.technology, M.exciting,
        ["Choose a platform (iOS, Android, Web)", "Learn the fundamentals", "Design your app concept",
         "Build a working prototype", "Test with real users", "Launch on a store or platform"],
        {"programming", "design", "engineering"},
        {"technology", "science"},
        (14, 50),
        "Building an app teaches you to think in systems. "
        "It's the intersection of creativity, logic, and empathy for users.",
    ),
    _t(
        "Learn AI & Machine Learning",
        "Understand the technology shaping the future by diving into AI fundamentals.",
        C.technology, M.mysterious,
        ["Learn Python basics", "Study ML fundamentals", "Complete an AI course",
         "Build a simple ML model", "Apply AI to a real problem"],
        {"programming", "analytics", "engineering"},
        {"technology", "science"},
        (16, 50),
        "AI literacy is becoming as essential as digital literacy. "
        "Understanding it positions you at the frontier of every industry.",
    ),
    _t(
        "Volunteer Regularly",
        "Make a meaningful impact in your community through consistent volunteer work.",
        C.social, M.joyful,
        ["Identify causes you care about", "Research local organizations", "Commit to a regular schedule",
         "Complete 50 volunteer hours", "Inspire others to join"],
        {"leadership", "communication", "teaching"},
        {"volunteering"},
        (14, 70),
        "Service to others is paradoxically one of the best things you can do for yourself. "
        "It builds purpose, connection, and perspective.",
    ),
    _t(
        "Try 12 New Experiences",
        "Step outside your comfort zone with one new experience every month for a year.",
        C.adventure, M.exciting,
        ["Brainstorm 20 experiences you've never tried", "Pick one per month", "Document each experience",
         "Rate and reflect on each one", "Share your favorites with others"],
        set(),
        {"travel", "sports", "nature"},
        (14, 60),
        "Novelty is the antidote to stagnation. "
        "Each new experience rewires your brain and expands your sense of what's possible.",
    ),
    _t(
        "Start a Podcast",
        "Share your voice and ideas with the world through your own podcast show.",
        C.creative, M.exciting,
        ["Define your podcast concept and audience", "Get recording equipment", "Record your first 3 episodes",
         "Launch on podcast platforms", "Build a consistent release schedule", "Reach 100 listeners"],
        {"communication", "marketing", "music"},
        {"technology", "business", "movies"},
        (16, 55),
        "Podcasting develops your voice, literally and figuratively. "
        "Teaching others forces you to deeply understand your subject.",
    ),
    _t(
        "Write a Short Story Collection",
        "Channel your creativity into compelling narratives that captivate readers.",
        C.creative, M.mysterious,
        ["Brainstorm story ideas", "Write one short story per month", "Join a writing workshop",
         "Get feedback from beta readers", "Edit and polish your collection", "Publish or submit to magazines"],
        {"writing", "communication"},
        {"reading", "art"},
        (14, 70),
        "Writing fiction is an exercise in radical empathy. "
        "Creating characters teaches you to see the world through completely different eyes.",
    ),
    _t(
        "Build a Workout Routine",
        "Create a sustainable fitness habit that transforms your energy and confidence.",
        C.health, M.exciting,
        ["Set specific fitness goals", "Choose your workout style", "Start with 3 days per week",
         "Track your progress", "Increase intensity gradually", "Hit a personal record"],
        {"fitness"},
        {"sports", "health"},
        (14, 60),
        "Physical fitness is the foundation that supports every other dream. "
        "A strong body creates a strong mind.",
    ),
    _t(
        "Build a Personal Brand",
        "Establish yourself as a thought leader in your industry.",
        C.career, M.exciting,
        ["Define your unique value proposition", "Create content strategy", "Build social media presence",
         "Write articles or blog posts", "Speak at events or podcasts"],
        {"marketing", "writing", "communication", "design"},
        {"business", "technology"},
        (16, 50),
        "Your personal brand is your reputation at scale. "
        "In the attention economy, visibility compounds like interest.",
    ),
)

TEMPLATES_BY_TITLE: dict[str, DreamTemplate] = {t.title: t for t in TEMPLATES}

# Onboarding vocabularies (display case; profiles store them lowercased)
AVAILABLE_SKILLS: tuple[str, ...] = (
    "Programming", "Design", "Writing", "Marketing", "Music", "Art",
    "Photography", "Cooking", "Teaching", "Leadership", "Communication",
    "Problem Solving", "Analytics", "Fitness", "Languages", "Public Speaking",
    "Engineering", "Medicine", "Law", "Finance",
)

AVAILABLE_INTERESTS: tuple[str, ...] = (
    "Technology", "Science", "Sports", "Travel", "Food", "Music",
    "Art", "Fashion", "Gaming", "Reading", "Nature", "Photography",
    "Business", "Health", "Education", "Movies", "Volunteering",
    "Crafts", "Sustainability", "Psychology",
)


def get_template(title: str) -> DreamTemplate | None:
    return TEMPLATES_BY_TITLE.get(title)


def list_templates() -> list[DreamTemplate]:
    return list(TEMPLATES)
