"""
Fake classification server for testing HttpClassifier without the hosted model.

Simulates the remote service on port 7860.
POST /classify_image with multipart field "image" → {"detected_object", "disposal_bin"}.
An empty upload answers 400 with {"error": "..."}.

Usage:
    python -m trashsight.scripts.fake_classifier_server
    CLASSIFIER_URL=http://localhost:7860/classify_image uvicorn trashsight.services.api:app
"""

import asyncio
import random
import uvicorn
from fastapi import FastAPI, File, UploadFile
from fastapi.responses import JSONResponse
from trashsight.orchestrator import bins

app = FastAPI(title="fake-classifier-server")


@app.post("/classify_image")
async def classify_image(image: UploadFile = File(...)):
    data = await image.read()
    print(f"[classifier] {image.filename} ({image.content_type}, {len(data)} bytes)")
    if not data:
        return JSONResponse(status_code=400, content={"error": "Empty image upload"})
    await asyncio.sleep(0.5)  # simulated inference time
    disposal_bin = random.choice(list(bins.SAMPLE_OBJECTS))
    detected = random.choice(bins.SAMPLE_OBJECTS[disposal_bin])
    print(f"[classifier] → {detected} / {disposal_bin}")
    return {"detected_object": detected, "disposal_bin": disposal_bin}


@app.get("/health")
async def health():
    return {"ok": True}


if __name__ == "__main__":
    print("Fake classifier server starting on http://localhost:7860")
    uvicorn.run(app, host="0.0.0.0", port=7860)
