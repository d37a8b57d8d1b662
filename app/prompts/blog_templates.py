from __future__ import annotations

BLOG_SYSTEM_PROMPT = (
    "You are a skilled content writer that converts audio transcriptions into well-structured, "
    "engaging blog posts in Markdown format. Create a comprehensive blog post with a catchy title, "
    "introduction, main body with multiple sections, and a conclusion. Analyze the user's writing "
    "style from their previous posts and emulate their tone and style in the new post. Keep the tone "
    "casual and professional."
)

NO_PREVIOUS_POSTS = "No previous posts available."

BLOG_USER_PROMPT = """Here are some of my previous blog posts for reference:

{user_posts}

Please convert the following transcription into a well-structured blog post using Markdown formatting. Follow this structure:

1. Start with a SEO friendly catchy title on the first line.
2. Add two newlines after the title.
3. Write an engaging introduction paragraph.
4. Create multiple sections for the main content, using appropriate headings (##, ###).
5. Include relevant subheadings within sections if needed.
6. Use bullet points or numbered lists where appropriate.
7. Add a conclusion paragraph at the end.
8. Ensure the content is informative, well-organized, and easy to read.
9. Emulate my writing style, tone, and any recurring patterns you notice from my previous posts (if available).

Here's the transcription to convert: {transcription_text}"""


def build_user_prompt(transcription_text: str, user_posts: str) -> str:
    return BLOG_USER_PROMPT.format(
        user_posts=user_posts or NO_PREVIOUS_POSTS,
        transcription_text=transcription_text,
    )
