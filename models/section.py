from enum import Enum


class SectionType(str, Enum):
    INTRO = "intro"
    HOOK = "hook"
    OVERVIEW = "overview"
    PROBLEM_STATEMENT = "problem_statement"
    SOLUTION_OVERVIEW = "solution_overview"
    TECHNICAL_DETAILS = "technical_details"
    CODE_CHANGES = "code_changes"
    FILE_ANALYSIS = "file_analysis"
    REVIEW_PROCESS = "review_process"
    COLLABORATION = "collaboration"
    TIMELINE = "timeline"
    IMPACT_ASSESSMENT = "impact_assessment"
    KEY_INSIGHTS = "key_insights"
    SUMMARY = "summary"
    CALL_TO_ACTION = "call_to_action"
    OUTRO = "outro"


SECTION_TITLES: dict[SectionType, str] = {
    SectionType.INTRO: "Introduction",
    SectionType.HOOK: "Opening Hook",
    SectionType.OVERVIEW: "PR Overview",
    SectionType.PROBLEM_STATEMENT: "Problem Statement",
    SectionType.SOLUTION_OVERVIEW: "Solution Overview",
    SectionType.TECHNICAL_DETAILS: "Technical Details",
    SectionType.CODE_CHANGES: "Code Changes",
    SectionType.FILE_ANALYSIS: "File Analysis",
    SectionType.REVIEW_PROCESS: "Review Process",
    SectionType.COLLABORATION: "Team Collaboration",
    SectionType.TIMELINE: "Development Timeline",
    SectionType.IMPACT_ASSESSMENT: "Impact Assessment",
    SectionType.KEY_INSIGHTS: "Key Insights",
    SectionType.SUMMARY: "Summary",
    SectionType.CALL_TO_ACTION: "Next Steps",
    SectionType.OUTRO: "Conclusion",
}

# Sections that count as "technical" when judging audience fit.
TECHNICAL_SECTIONS = frozenset(
    {SectionType.TECHNICAL_DETAILS, SectionType.CODE_CHANGES, SectionType.FILE_ANALYSIS}
)
