"""Prompt templates for the generation gateway.

Templates are ``str.format`` strings, so literal JSON braces are doubled.
"""
from __future__ import annotations

SEARCH_JOBS = """\
You are an expert job search aggregator acting as a job board API.
Use your search capabilities to find 5 REAL, currently open job postings.

The user is searching for "{term}" in "{location}".

Rules:
- Extract each posting's details and the direct URL to the original posting.
- Prefer a detailed description over a short one.
- If a salary is not explicitly mentioned, use "Not specified". Do not invent one.
- Return ONLY a JSON array, no introduction and no markdown.

Each element must have this shape:
{{"id": "string", "title": "string", "company": "string", "location": "string",
  "description": "string", "tags": ["string"], "salary": "string",
  "postedDate": "string", "sourceUrl": "string"}}
"""

PARSE_JOB_POSTING = """\
You are a job description parser. Analyze the job posting text and/or image
and extract its key details.

Rules:
- Identify the job title, company, location and the full description.
- If a salary is mentioned extract it, otherwise use "Not specified".
- Suggest 3-5 relevant skill tags.
- Use "Today" for postedDate.

Return ONLY one JSON object with this shape:
{{"title": "string", "company": "string", "location": "string",
  "description": "string", "tags": ["string"], "salary": "string",
  "postedDate": "string"}}
{job_text}"""

PARSE_RESUME = """\
You are an HR data parser. Extract profile data from the resume text below.

Rules:
- "name": the candidate's full name.
- "bio": a concise professional bio taken from the summary or objective;
  if there is none, write one sentence based on the most recent role.
- "baseResume": the full resume text, cleaned of extraction artifacts.

Return ONLY a JSON object: {{"name": "string", "bio": "string", "baseResume": "string"}}

Resume text:
{resume_text}
"""

TAILOR_RESUME = """\
You are an ATS resume optimizer and professional resume writer. Tailor the
candidate's base resume to the job description and return it as JSON.
The resume must fit on one page.

Candidate:
- Name: {name}
- Email: {email}
- Phone: {phone}
- LinkedIn: {linkedin}
- GitHub: {github}
- Portfolio: {portfolio}
- Base resume:
---
{base_resume}
---

Job description:
---
{job_description}
---

Rules:
1. Rewrite the summary and experience bullets around the job's keywords and
   required skills. Quantify achievements where possible.
2. Group skills into categories such as "Languages", "Frameworks & Libraries",
   "Databases", "Tools & Platforms".
3. Give each project 2-3 bullets on achievements and technologies.
4. Return ONLY one JSON object with this shape:
{{"contact": {{"name": "", "email": "", "phone": "", "location": "",
              "linkedin": "", "github": "", "portfolio": ""}},
  "summary": "",
  "experience": [{{"title": "", "company": "", "dates": "", "location": "", "points": [""]}}],
  "education": [{{"degree": "", "university": "", "dates": ""}}],
  "projects": [{{"name": "", "points": [""]}}],
  "skills": [{{"category": "", "list": "comma-separated skills"}}]}}
"""

COVER_LETTER = """\
You are a professional career writer. Write a personalized cover letter for
{name} applying for the {title} position at {company}.

- Use the candidate's bio for a genuine, personal tone.
- Refer to specific requirements from the job description.
- Introduction, body and conclusion.
- No placeholders like "[Your Name]" or "[Date]".
- Output only the letter text.

Candidate:
- Name: {name}
- Email: {email}
- Phone: {phone}
- Bio: {bio}

Job:
- Title: {title}
- Company: {company}
- Description: {description}
"""

INTERVIEW_QUESTIONS = """\
You are an experienced hiring manager. For the "{title}" role at "{company}",
write 10-12 likely interview questions grouped into the categories
"Behavioral", "Technical" and "Situational". Give each question a short tip
on what a good answer shows.

Job description:
---
{description}
---

Return ONLY a JSON array:
[{{"category": "string", "questions": [{{"question": "string", "tip": "string"}}]}}]
"""

SCORE_ANSWER = """\
You are a supportive interview coach. The candidate is practising.
Question: "{question}"
Answer: "{answer}"

Assess structure (e.g. STAR), clarity and relevance, and give specific
suggestions. Return ONLY a JSON object:
{{"feedback": "string", "suggestions": ["string"]}}
"""

SCORE_ANSWER_WITH_DELIVERY = """\
You are a communication coach reviewing a recorded interview answer.
Question: "{question}"
Transcribed answer: "{answer}"

1. Assess the answer's structure, clarity and relevance (e.g. STAR).
2. You cannot see the recording: give general, best-practice advice on body
   language and speaking pace.
3. Give actionable suggestions for every area.

Return ONLY a JSON object:
{{"feedback": "string", "bodyLanguageFeedback": "string",
  "pacingFeedback": "string", "suggestions": ["string"]}}
"""

SKILLS_GAP = """\
As a career analyst, compare the resume with the job description. List the
resume skills that match the job, the job's key skills the resume lacks, and
how to close the gap.

Resume:
---
{resume}
---

Job description:
---
{job_description}
---

Return ONLY a JSON object:
{{"matchingSkills": ["string"], "missingSkills": ["string"], "suggestions": "string"}}
"""

FOLLOW_UP_EMAIL = """\
Write a polite, professional follow-up email from {name} after an interview
for the {title} position at {company}.

- Interviewer: {interviewer}
- Interview date: {interview_date}
- Candidate's notes: {notes}

Keep it concise and enthusiastic, thank the interviewer, restate interest and
weave in one point from the notes if there are any. Output only the email
body: no subject line and no placeholders.
"""

COMPANY_BRIEFING = """\
As a research analyst, brief a job candidate on the company "{company}".
Use your search capabilities for recent, relevant information.

Return ONLY a JSON object:
{{"mission": "one or two sentences",
  "recentNews": "a short paragraph on a recent announcement",
  "culture": "a summary of the perceived culture",
  "interviewQuestions": ["questions an interviewer might ask about the company"]}}
"""

ANALYZE_OFFER = """\
You are a salary negotiation coach. Use your search capabilities for current
market data on this role and location.

- Job title: {title}
- Company: {company}
- Location: {location}
- Resume summary: {resume_excerpt}
- Offer: base salary {salary}; bonus {bonus}; equity/other {equity}

Return ONLY a JSON object:
{{"competitiveness": "e.g. Slightly below market / Competitive / Strong offer",
  "recommendedRange": "a realistic counter-offer range",
  "script": "a counter-offer script the candidate can adapt"}}
"""

FIND_CONTACTS = """\
You are a networking assistant. Use your search capabilities to find 3-5
public professional profiles of people at "{company}". Prefer hiring
managers, recruiters, talent acquisition and senior people in relevant teams.

Return ONLY a JSON array; use "" for anything you cannot find:
[{{"name": "string", "title": "string", "linkedinUrl": "string", "email": "string"}}]
"""

OUTREACH_MESSAGE = """\
Draft a short, polite outreach message from "{user_name}" to
"{contact_name} ({contact_title})". {user_name} is interested in the
"{job_title}" role at their company. The goal is to connect and express
interest, not to ask for a job. Output only the message text.
"""

APPLICATION_INSIGHTS = """\
You are a strategic career advisor. Prepare the candidate for interviews on
this application.

Job:
- Title: {title}
- Company: {company}
- Description: {description}

Resume:
---
{resume}
---

Candidate's notes:
---
{notes}
---

Return ONLY a JSON object:
{{"strengths": ["3-4 strengths for this role"],
  "talkingPoints": ["3-4 points to raise proactively"],
  "redFlags": ["2-3 weaknesses or concerns to prepare for"]}}
"""

CAREER_PATH = """\
You are a career strategist. Plan the path from "{current_role}" to
"{goal_role}". Use your search capabilities to understand what the goal role
requires.

Return ONLY a JSON object:
{{"currentRole": "string", "goalRole": "string",
  "keySkillsToDevelop": ["string"], "projectIdeas": ["string"],
  "bridgeRoles": ["string"], "timeline": "string"}}
"""

ANALYZE_APPLICATION_FORM = """\
You are a job application form assistant. Analyze the application page at
the URL below and pre-fill it from the candidate's profile.

URL: {url}

Candidate:
- Full name: {name}
- Email: {email}
- Phone: {phone}
- LinkedIn: {linkedin}
- GitHub: {github}
- Portfolio: {portfolio}
- Summary: {bio}

Applying for {title} at {company}.

Rules:
1. Map the profile to the standard fields (name, email, phone, LinkedIn...).
   For a resume upload field say the resume should be attached.
2. Find the custom questions (motivation, experience, salary expectations...)
   and answer each concisely for this job.
3. Return ONLY a JSON object with two arrays of fields:
{{"basicInfo": [{{"id": "string", "label": "string", "type": "text|textarea|file|custom", "value": "string"}}],
  "customQuestions": [{{"id": "string", "label": "string", "type": "textarea", "value": "string"}}]}}
"""
