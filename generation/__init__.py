"""
Study Pack Generation Pipeline
generation/

Steps:
1. Prompt Builder     — fill the study pack template from the student's request
2. GPT Client         — one Chat Completions call → raw notes + question paper text
3. Section Splitter   — separate notes from the question paper
4. Line Classifier    — heading / bullet / question / marks role per line
5. Document Renderer  — paginated PDF with "Page i of N" footers
6. Orchestrator       — runs 1-5 for one request, encodes the documents
"""
