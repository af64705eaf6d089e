"""Built-in English lexicon shipped with the companion."""

from aura_companion.lexicon.data_models import CopingStrategy, Lexicon, ProfessionalResource, Theme

THEME_KEYWORDS = {
    Theme.ANXIETY: ("anxious", "worried", "panic", "nervous"),
    Theme.SADNESS: ("sad", "depressed", "down", "crying"),
    Theme.STRESS: ("stressed", "pressure", "overwhelmed", "too much"),
    Theme.LONELINESS: ("lonely", "alone", "isolated", "disconnected"),
    Theme.ANGER: ("angry", "mad", "furious", "frustrated"),
    # 'overwhelmed' and 'too much' are shadowed by stress; only "can't handle" reaches this theme
    Theme.OVERWHELM: ("overwhelmed", "can't handle", "too much"),
}

CRISIS_KEYWORDS = (
    "suicide",
    "kill myself",
    "end it all",
    "hurt myself",
    "self harm",
    "die",
    "death",
    "hopeless",
    "no point",
    "better off dead",
    "can't go on",
    "want to die",
)

RESPONSES = {
    Theme.ANXIETY: (
        "Anxiety can feel overwhelming, but you're taking a positive step by acknowledging it. Research shows that naming our emotions can help reduce their intensity. Can you tell me what specific thoughts or situations are contributing to your anxiety right now?",
        "I hear that you're feeling anxious. One evidence-based technique that many find helpful is the 5-4-3-2-1 grounding method: name 5 things you can see, 4 you can touch, 3 you can hear, 2 you can smell, and 1 you can taste. Would you like to try this together?",
        "Anxiety often involves our mind focusing on 'what if' scenarios. A helpful approach is to gently ask yourself: 'Is this thought helpful right now?' and 'What would I tell a good friend in this situation?' What comes up for you when you consider these questions?",
    ),
    Theme.SADNESS: (
        "Thank you for sharing these difficult feelings with me. Sadness is a natural human emotion that often signals something important to us. Research shows that allowing ourselves to feel sadness, rather than pushing it away, can be part of healthy emotional processing. What do you think your sadness might be telling you?",
        "I'm sorry you're going through this difficult time. Sometimes when we're sad, it can help to practice self-compassion - treating ourselves with the same kindness we'd show a good friend. What would you say to comfort a friend who was feeling exactly as you do right now?",
        "Sadness can feel heavy and isolating. Studies show that gentle movement, even just a short walk, can help shift our emotional state. When you're ready, what's one small, nurturing thing you could do for yourself today?",
    ),
    Theme.STRESS: (
        "Stress affects us all, and recognizing it is the first step toward managing it effectively. Research indicates that our breathing directly impacts our stress response. Would you be open to trying a brief breathing exercise together - inhaling for 4 counts, holding for 4, and exhaling for 6?",
        "It sounds like you're carrying a lot right now. Stress often comes from feeling like we have too much to handle at once. Sometimes it helps to break things down: what's one specific thing that's contributing to your stress that we could explore together?",
        "Chronic stress can impact both our mental and physical well-being. Evidence-based stress management often involves identifying what's within our control versus what isn't. What aspects of your current situation feel most within your influence right now?",
    ),
    Theme.LONELINESS: (
        "Loneliness is one of the most universal human experiences, yet it can feel so isolating. Research shows that even brief, meaningful connections can help. I'm glad you're reaching out here. What does connection mean to you, and what has helped you feel less alone in the past?",
        "Feeling lonely doesn't necessarily mean being alone - sometimes we can feel lonely even when surrounded by people. This suggests loneliness is often about the quality of connection rather than quantity. What kind of connection are you most longing for right now?",
        "Studies indicate that helping others or engaging in meaningful activities can help combat loneliness by creating a sense of purpose and connection. What activities or causes have felt meaningful to you in the past?",
    ),
    Theme.ANGER: (
        "Anger often carries important information about our boundaries, values, or unmet needs. Rather than judging the anger, it can be helpful to get curious about what it's trying to tell you. What do you think might be underneath this anger?",
        "Feeling angry is completely valid - it's often a signal that something important to you has been threatened or violated. Research shows that acknowledging anger without acting impulsively can be powerful. What would it look like to honor this feeling while also taking care of yourself?",
        "Anger can be energizing but also exhausting. Evidence-based approaches often involve finding healthy ways to express and channel this energy. What has helped you process difficult emotions like this in the past?",
    ),
    Theme.OVERWHELM: (
        "Feeling overwhelmed often happens when we're trying to hold too much at once. It's like our emotional cup is overflowing. One approach that research supports is the practice of 'emotional triage' - identifying what needs immediate attention versus what can wait. What feels most urgent for you right now?",
        "When we're overwhelmed, our thinking can become scattered. A helpful technique is to focus on just the next single step, rather than the whole mountain. What's one small, manageable thing you could focus on right now?",
        "Overwhelm often signals that we need to pause and recalibrate. Studies show that even brief moments of mindfulness can help restore our sense of balance. Would you be open to taking three deep breaths together and noticing what you're experiencing right now?",
    ),
    Theme.GENERAL: (
        "Thank you for sharing that with me. It takes courage to explore our inner experiences. What would it feel like to approach this situation with curiosity rather than judgment?",
        "I'm listening. Sometimes it helps to step back and ask: 'What would I need right now to feel even 10% better?' What comes to mind for you?",
        "Your feelings make complete sense given what you're experiencing. If you were to imagine your wisest, most compassionate self, what might they say to you right now?",
        "It sounds like you're navigating something complex. Research shows that simply naming and acknowledging our experiences can be therapeutic in itself. How does it feel to put words to what you're going through?",
        "I appreciate you trusting me with these feelings. Sometimes healing happens not through fixing or changing, but through being truly seen and understood. What feels most important for you to be heard about right now?",
    ),
}

COPING_STRATEGIES = (
    CopingStrategy(
        name="Box Breathing",
        description="Inhale for 4, hold for 4, exhale for 4, hold for 4. Repeat 4-6 times.",
        applies_to_theme=Theme.ANXIETY,
    ),
    CopingStrategy(
        name="5-4-3-2-1 Grounding",
        description="Name 5 things you see, 4 you can touch, 3 you hear, 2 you smell, 1 you taste.",
        applies_to_theme=Theme.ANXIETY,
    ),
    CopingStrategy(
        name="Self-Compassion Break",
        description="Acknowledge your pain, remember you're not alone, and offer yourself kindness.",
        applies_to_theme=Theme.GENERAL,
    ),
    CopingStrategy(
        name="Progressive Muscle Relaxation",
        description="Tense and release each muscle group, starting from your toes up to your head.",
        applies_to_theme=Theme.STRESS,
    ),
    CopingStrategy(
        name="Emotional Check-in",
        description="Ask yourself: What am I feeling? Where do I feel it in my body? What do I need right now?",
        applies_to_theme=Theme.GENERAL,
    ),
)

PROFESSIONAL_RESOURCES = (
    ProfessionalResource(
        name="Crisis Text Line",
        contact="Text HOME to 741741",
        description="24/7 crisis support via text message",
    ),
    ProfessionalResource(
        name="National Suicide Prevention Lifeline",
        contact="Call or text 988",
        description="24/7 free and confidential support",
    ),
    ProfessionalResource(
        name="SAMHSA National Helpline",
        contact="1-800-662-4357",
        description="Treatment referral and information service",
    ),
    ProfessionalResource(
        name="Psychology Today",
        contact="psychologytoday.com",
        description="Find licensed therapists in your area",
    ),
)

CRISIS_TEMPLATE = """I'm very concerned about what you've shared. Your safety is the most important thing right now. Please reach out for immediate professional support:

**Crisis Text Line**: Text HOME to 741741
**National Suicide Prevention Lifeline**: Call or text 988
**Emergency Services**: Call 911

You don't have to go through this alone. There are people trained to help who want to support you through this difficult time. Please consider reaching out to one of these resources right now.

Would you like me to help you think about who in your life you could also reach out to for support?"""

WELCOME_TEMPLATE = """Hello {first_name}! I'm your Aura companion - a supportive space for emotional wellness and self-reflection.

**Important Disclaimer:** I'm an AI assistant designed to provide general emotional support and wellness information. I am not a licensed therapist, counselor, or medical professional. If you're experiencing a mental health crisis, thoughts of self-harm, or need professional help, please contact:

• **Crisis Text Line**: Text HOME to 741741
• **National Suicide Prevention Lifeline**: 988
• **Emergency Services**: 911

I'm here to listen, offer evidence-based coping strategies, and help you explore your feelings in a supportive way. How are you feeling today, {first_name}?"""

COPING_TEMPLATE = """Here's a coping technique that might help:

**{name}**
{description}

Would you like to try this together, or would you prefer to explore something else?"""

RESOURCES_INTRO = "Here are some professional resources that might be helpful:"

RESOURCES_OUTRO = (
    "Remember, seeking professional help is a sign of strength, not weakness. These resources are staffed by "
    "trained professionals who can provide the specialized support you deserve."
)

DEFAULT_LEXICON = Lexicon(
    theme_keywords=THEME_KEYWORDS,
    crisis_keywords=CRISIS_KEYWORDS,
    responses=RESPONSES,
    crisis_template=CRISIS_TEMPLATE,
    welcome_template=WELCOME_TEMPLATE,
    coping_template=COPING_TEMPLATE,
    resources_intro=RESOURCES_INTRO,
    resources_outro=RESOURCES_OUTRO,
    coping_strategies=COPING_STRATEGIES,
    professional_resources=PROFESSIONAL_RESOURCES,
)
