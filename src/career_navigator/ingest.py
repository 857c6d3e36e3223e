# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Handles ingestion of profile sources (resume documents, GitHub, web pages).
"""

import io
import logging
import os
import re
from pathlib import Path
from typing import Optional

import requests
from bs4 import BeautifulSoup
from docx import Document
from pypdf import PdfReader

from career_navigator.errors import ExtractionError

logger = logging.getLogger(__name__)

GITHUB_REFERENCE = re.compile(
    r"^(?:@|(?:https?://)?(?:www\.)?github\.com/)([A-Za-z0-9](?:[A-Za-z0-9-]{0,38}))/?$"
)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36"
)


def _pdf_text(data: bytes) -> str:
    reader = PdfReader(io.BytesIO(data))
    return '\n'.join(page.extract_text() or "" for page in reader.pages)


def _docx_text(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    return '\n'.join(para.text for para in doc.paragraphs)


def extract_text(data: bytes, filename: str = "") -> str:
    """
    Extracts text from an uploaded document.
    PDF and DOCX are detected by extension or magic bytes; anything else is decoded as UTF-8.
    Raises ExtractionError if nothing readable comes out.
    """
    name = filename.lower()
    try:
        if name.endswith(".pdf") or data.startswith(b"%PDF"):
            text = _pdf_text(data)
        elif name.endswith(".docx") or data.startswith(b"PK"):
            text = _docx_text(data)
        else:
            text = data.decode("utf-8")
    except Exception as e:
        raise ExtractionError(f"Could not extract text from {filename or 'document'}: {e}") from e

    if not text.strip():
        raise ExtractionError(f"No text found in {filename or 'document'}")
    return text


def read_resume(file_path: str) -> str:
    """
    Reads a resume file from disk.
    Failures are logged and yield "" so the remaining sources can still be submitted.
    """
    try:
        data = Path(file_path).read_bytes()
        return extract_text(data, os.path.basename(file_path))
    except (OSError, ExtractionError) as e:
        logger.error(f"Error reading resume {file_path}: {e}")
        return ""


def _extract_text_from_html(html) -> str:
    """Extracts clean text from raw HTML content."""
    soup = BeautifulSoup(html, 'html.parser')

    for script in soup(["script", "style"]):
        script.decompose()

    lines = (line.strip() for line in soup.get_text().splitlines())
    chunks = (phrase.strip() for line in lines for phrase in line.split("  "))
    return '\n'.join(chunk for chunk in chunks if chunk)


def read_url(url: str, verify: str | bool = True) -> str:
    """
    Fetches and extracts text from a public profile or portfolio page.
    JS-rendered pages usually come back nearly empty; paste their text instead.
    """
    try:
        response = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=10, verify=verify)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch {url}: {e}")
        return ""

    text = _extract_text_from_html(response.content)
    if len(text) < 50:
        logger.warning(f"Page at {url} returned minimal content. It may require a browser; paste the text instead.")
    return text


def github_username(text: str) -> Optional[str]:
    """
    Returns the GitHub login named by `@user` or a github.com profile URL.
    Anything else is a free-text summary and yields None, so a bare word is never looked up.
    """
    match = GITHUB_REFERENCE.match(text.strip())
    return match.group(1) if match else None


def ingest_github(username: str, verify: str | bool = True) -> str:
    """
    Fetches public repositories for a GitHub user and returns a markdown summary.
    """
    api_url = f"https://api.github.com/users/{username}/repos?sort=updated&per_page=100"
    headers = {'Accept': 'application/vnd.github.v3+json'}

    # Optional: Use token if available to avoid rate limits
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        headers['Authorization'] = f"token {token}"

    try:
        logger.info(f"Fetching GitHub profile for: {username}")
        response = requests.get(api_url, headers=headers, timeout=10, verify=verify)
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to ingest GitHub profile: {e}")
        return ""

    if response.status_code == 404:
        logger.warning(f"GitHub user '{username}' not found.")
        return ""
    if response.status_code != 200:
        logger.error(f"GitHub API error: {response.status_code}")
        return ""

    repos = sorted(response.json(), key=lambda r: r.get('stargazers_count', 0), reverse=True)[:15]
    languages = sorted({r['language'] for r in repos if r.get('language')})

    summary_lines = [f"## GitHub Portfolio ({username})"]
    if languages:
        summary_lines.append(f"Languages: {', '.join(languages)}")

    for repo in repos:
        name = repo.get('name')
        if repo.get('fork'):
            name += " (Fork)"
        desc = repo.get('description') or "No description"
        lang = repo.get('language') or "N/A"
        stars = repo.get('stargazers_count', 0)
        topics = ", ".join(repo.get('topics') or [])
        line = f"- **{name}** (★{stars} | {lang}): {desc}"
        if topics:
            line += f" [topics: {topics}]"
        summary_lines.append(line)

    return "\n".join(summary_lines)
