"""평가 프롬프트 조립

모델에는 [system_prompt, 이미지, genre_guide] 순서로 한 번만 보낸다.
"""
from dataclasses import dataclass
from typing import Optional

from mirror.schemas.genre import GenreDetectionResult
from mirror.services.persona_service import CATEGORIES, PersonaTemplate, lookup

PHOTO_GENRES = [
    ("Landscape Photography", "Natural landscapes, scenery, mountains, sea, sky, etc."),
    ("Portrait Photography", "Single subject or small group portraits"),
    ("Street Photography", "Urban life, street scenes, city culture"),
    ("Architectural Photography", "Buildings, structures, interiors, design"),
    ("Macro/Close-up Photography", "Extremely close-up view of small subjects"),
    ("Wildlife/Nature Photography", "Animals, plants, natural ecosystems"),
    ("Product/Commercial Photography", "Products, marketing, advertising"),
    ("Sports/Action Photography", "Dynamic movement, sports activities"),
    ("Night/Astrophotography", "Night sky, stars, galaxies, night scenes"),
    ("Black and White Photography", "Grayscale rather than color images"),
    ("Documentary Photography", "Social, cultural, historical documentation"),
    ("Abstract/Experimental Photography", "Non-representational, conceptual, experimental approaches"),
    ("Fashion Photography", "Clothing, accessories, style-related"),
    ("Food Photography", "Culinary, food presentation, food-related"),
    ("Wedding/Event Photography", "Special occasions, anniversaries, weddings"),
    ("Drone/Aerial Photography", "Scenes shot from the air"),
    ("Cinematic Photography", "Visual style reminiscent of film scenes"),
    ("Mobile Photography", "Photos taken with smartphones with characteristic traits"),
    ("Other specialized genres", "Minimalism, Underwater, Industrial, Conceptual, etc."),
]

SCORING_GUIDELINES = """Scoring Guidelines:
- 96-100: Gallery-worthy. Exceptional technique and emotional impact.
- 90-95: Professional-level work with minor areas to improve.
- 85-89: Strong execution with creative flair.
- 80-84: Well done, a few refinements needed.
- 70-79: Solid effort with noticeable issues to address.
- 60-69: Developing skills. Focus on fundamentals.
- 50-59: Needs improvement across key areas.
- Below 50: Early stage. Embrace feedback to grow."""

RESPONSE_SCHEMA = """{
  "detectedGenre": "detected photo genre",
  "summary": "six-word summary highlighting strengths",
  "overallScore": (0-100 overall score),
  "tags": ["tag1", "tag2", "tag3", "tag4", "tag5"],
  "categoryScores": {
    "composition": (0-100 score),
    "lighting": (0-100 score),
    "color": (0-100 score),
    "focus": (0-100 score),
    "creativity": (0-100 score)
  },
  "analysis": {
    "overall": {
      "text": "comprehensive evaluation (mentioning genre characteristics)",
      "strengths": ["strength1", "strength2", "strength3"],
      "improvements": ["improvement1", "improvement2"],
      "modifications": "specific modification suggestions to improve the photo (considering genre)"
    },
    "composition": {
      "text": "composition evaluation (considering genre)",
      "suggestions": ""
    },
    "lighting": {
      "text": "lighting and exposure evaluation (considering genre)",
      "suggestions": ""
    },
    "color": {
      "text": "color and tone evaluation (considering genre)",
      "suggestions": ""
    },
    "focus": {
      "text": "focus and sharpness evaluation (considering genre)",
      "suggestions": ""
    },
    "creativity": {
      "text": "story and originality evaluation (considering genre)",
      "suggestions": ""
    },
    "genreSpecific": {
      "text": "additional evaluation specific to the genre",
      "suggestions": "genre-specific improvement suggestions"
    }
  }
}"""


@dataclass(frozen=True)
class CritiquePrompt:
    """평가 요청 프롬프트 (이미지 앞/뒤 블록)"""
    system_prompt: str
    genre_guide: str

    def parts(self) -> list[str]:
        return [self.system_prompt, self.genre_guide]


def summarize_genre(detection: Optional[GenreDetectionResult]) -> str:
    """장르 감지 결과 한 줄 요약"""
    if detection is None or not detection.detected_genre:
        return ""

    props = detection.properties
    primary = props.primary_genre if props and props.primary_genre else "Unknown"
    secondary = props.secondary_genre if props and props.secondary_genre else "Unknown"
    keywords = ", ".join(detection.keywords) or "none"

    return f"Genre: {detection.detected_genre}, Primary: {primary}, Secondary: {secondary}, Keywords: {keywords}"


def build_persona_section(persona: PersonaTemplate, persona_key: str) -> str:
    """페르소나 스타일 지침"""
    lines = [
        f"Role: You are {persona.role}.",
        f"Tone: {persona.tone}",
        f"Style: {persona.style}",
    ]

    if persona.voice_sample:
        lines.append(f'Example of persona voice: "{persona.voice_sample}"')

    if persona.criteria:
        lines.append("")
        lines.append(f"Evaluation approach of {persona_key}:")
        for category in CATEGORIES:
            if category in persona.criteria:
                lines.append(f"- {category.capitalize()}: {persona.criteria[category].strip()}")

    tips = persona.phrasing_tips
    if tips:
        for title, examples in (
            ("Strengths (how this persona gives praise)", tips.strengths),
            ("Improvements (how this persona points out issues)", tips.improvements),
            ("Modifications (how this persona suggests edits)", tips.modifications),
        ):
            lines.append("")
            lines.append(f"{title}:")
            lines.extend(f"- {example}" for example in examples or ["(No example provided)"])

    lines.append("")
    lines.append("Persona guidance:")
    lines.append(persona.guidance)

    return "\n".join(lines)


def build_genre_guide(language: str) -> str:
    """장르별 평가 가이드 (이미지 뒤에 붙는 블록)"""
    genres = "\n".join(f"- {name} - {description}" for name, description in PHOTO_GENRES)

    return f"""
### Photo Genre Detection and Application:
Classify the photo into one of the following genres:
{genres}

Focus on analysis using appropriate evaluation criteria and technical elements for the genre.
Award scores strictly in the range of 0-100 points, considering genre-specific weighting of important elements.
Provide at least 5 specific strengths and areas for improvement.
Provide the response in {language} language.
"""


def build_critique_prompt(detection: Optional[GenreDetectionResult], persona_key: str, language: str) -> CritiquePrompt:
    """페르소나 + 장르 정보로 평가 프롬프트 생성"""
    persona = lookup(persona_key)
    persona_key = getattr(persona_key, "value", persona_key)
    genre_summary = summarize_genre(detection)
    pre_detected = f"\n- Pre-detected info: {genre_summary}" if genre_summary else ""

    system_prompt = f"""You are a professional photo evaluation AI for mirror., an AI-based photo analysis service. Your task is to analyze user-uploaded photos and provide professional, useful feedback.

### Analysis Options:
- Response language: {language}{pre_detected}

### Persona Style Guide:
{build_persona_section(persona, persona_key)}

{SCORING_GUIDELINES}

### Response Format:
Respond in JSON format as follows:
{RESPONSE_SCHEMA}

Important: Provide your response in {language} language."""

    return CritiquePrompt(system_prompt=system_prompt, genre_guide=build_genre_guide(language))
