"""
Prompt construction for resume analysis.
The JSON schema embedded here must stay in step with schemas/resume.py.
"""

# Bump whenever the embedded schema or the instructions change
PROMPT_SCHEMA_VERSION = "1"


RESPONSE_SCHEMA = """{
  "personal_details": {
    "name": "string | null",
    "email": "string | null",
    "phone": "string | null",
    "linkedin": "string | null (LinkedIn URL)",
    "portfolio": "string | null (portfolio or personal site URL)",
    "location": "string | null (City, State/Country)"
  },
  "resume_content": {
    "summary": "string | null (professional summary or objective)",
    "work_experience": [
      {
        "company": "string | null",
        "position": "string | null",
        "duration": "string | null (Start Date - End Date)",
        "responsibilities": ["string"]
      }
    ],
    "education": [
      {
        "degree": "string | null",
        "institution": "string | null",
        "year": "string | null (graduation year)",
        "gpa": "string | null"
      }
    ],
    "projects": [
      {
        "name": "string | null",
        "description": "string | null",
        "technologies": ["string"]
      }
    ],
    "certifications": [
      {
        "name": "string | null",
        "issuer": "string | null",
        "date": "string | null"
      }
    ]
  },
  "skills": {
    "technical_skills": ["string"],
    "soft_skills": ["string"]
  },
  "ai_feedback": {
    "rating": "number from 0 to 10 (e.g. 7.5)",
    "rating_explanation": "string | null",
    "improvement_areas": ["string"],
    "suggested_skills": ["string"],
    "strengths": ["string"]
  }
}"""


ANALYSIS_PROMPT_HEADER = """You are an expert resume analyzer. Extract the key information from the resume text below and then give a comprehensive, constructive analysis of it.

OUTPUT RULES:
1. The output MUST be a single JSON object matching the schema below, with no text before or after it.
2. Every field in the schema must be present. Use null for any scalar value that is not found.
3. Every array field must ALWAYS be emitted as an array, using [] when nothing is found. Never use null for an array.
4. "ai_feedback.rating" is REQUIRED and must be a JSON number between 0 and 10 reflecting resume quality, content and presentation.
5. Copy personal details exactly as written in the resume; do not invent values.

SCHEMA (version {version}):
"""

ANALYSIS_PROMPT_FOCUS = """
Focus on:
1. Extracting accurate personal and professional information
2. Identifying both technical and soft skills
3. Providing a fair rating (0-10)
4. Suggesting specific areas for improvement
5. Recommending relevant skills for career growth
6. Highlighting key strengths
"""


def build_analysis_prompt(resume_text: str) -> str:
    """Render the analysis prompt. The resume text is inserted verbatim."""
    # Plain concatenation: resume text may contain braces, so no str.format
    return (
        ANALYSIS_PROMPT_HEADER.replace("{version}", PROMPT_SCHEMA_VERSION)
        + RESPONSE_SCHEMA
        + "\n"
        + ANALYSIS_PROMPT_FOCUS
        + "\nRESUME TEXT:\n---\n"
        + resume_text
        + "\n---\n"
    )
