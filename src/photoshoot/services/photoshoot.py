"""Describe-then-edit pipeline that produces the three photo shoot images."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from photoshoot.domain.errors import GenerationFailure, RemoteCallError
from photoshoot.domain.photoshoot import (
    DEFAULT_STYLE,
    ContentPart,
    SubjectDescriptions,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str], None]

PROGRESS_ANALYZING = "Analyzing images..."
PROGRESS_PORTRAIT = "Creating studio portrait..."
PROGRESS_PRODUCT = "Creating product photo..."
PROGRESS_LIFESTYLE = "Creating lifestyle scene..."

STYLE_PROMPTS: dict[str, str] = {
    "Editorial": (
        "High-end editorial photography style, professional photograph, "
        "high resolution, sharp focus, natural colors, realistic depth of field."
    ),
    "Cinematográfico": (
        "Cinematic style, dramatic lighting, high contrast, film grain, "
        "anamorphic lens look, moody atmosphere, professional color grading."
    ),
    "Retro": (
        "Vintage film photography style, retro color palette (e.g., Kodachrome, "
        "Polaroid), soft focus, authentic film grain, nostalgic feel."
    ),
    "Minimalista": (
        "Minimalist style, clean composition, simple background, negative space, "
        "focused on the subject, neutral color palette."
    ),
}

COMMON_PROMPT_SUFFIX = (
    "Photorealistic, shot on DSLR, 8k, hyper-detailed, vertical format. "
    "Ensure the final image is a photograph and not an illustration."
)

DESCRIBE_PROMPT = (
    "Analyze the two provided images. Image 1 contains a person. "
    "Image 2 contains an accessory. Provide a detailed, objective description "
    "of the person's key visual features (age range, gender presentation, "
    "hair style and color, skin tone, prominent facial features, body type) "
    "and the clothing they are wearing. Then, provide a detailed, objective "
    "description of the accessory (type of object, material, color, shape, "
    "details). Return ONLY the JSON object."
)

DESCRIPTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "person": {
            "type": "string",
            "description": "Detailed description of the person's appearance.",
        },
        "accessory": {
            "type": "string",
            "description": "Detailed description of the accessory's appearance.",
        },
    },
    "required": ["person", "accessory"],
    "additionalProperties": False,
}


class PhotoShootClient(Protocol):
    """Interface for the generative image provider."""

    async def describe(
        self,
        *,
        model: str,
        prompt: str,
        images: list[str],
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return a structured description of the given images."""

    async def edit(self, *, model: str, prompt: str, image: str) -> list[ContentPart]:
        """Edit ``image`` according to ``prompt`` and return the response parts."""


@dataclass(frozen=True)
class PhotoShootPrompts:
    """Edit instructions for the three shots."""

    portrait: str
    product: str
    lifestyle: str


@dataclass
class PhotoShootService:
    """Runs the sequential describe and edit calls for one photo shoot."""

    client: PhotoShootClient
    describe_model: str
    edit_model: str

    async def generate_photo_shoot(
        self,
        person_image: str,
        accessory_image: str,
        scenario: str,
        style: str,
        on_progress: ProgressCallback,
    ) -> list[str]:
        """Return ``[portrait, product, lifestyle]`` image payloads.

        Every step waits for the previous one; the first failure aborts the
        pipeline and is re-raised as :class:`RemoteCallError`.
        """
        step = "describe"
        try:
            on_progress(PROGRESS_ANALYZING)
            descriptions = await self.describe(person_image, accessory_image)
            prompts = build_prompts(descriptions, scenario, style)

            step = "portrait"
            on_progress(PROGRESS_PORTRAIT)
            portrait = await self.edit_image(person_image, prompts.portrait, step)

            step = "product"
            on_progress(PROGRESS_PRODUCT)
            product = await self.edit_image(accessory_image, prompts.product, step)

            step = "lifestyle"
            on_progress(PROGRESS_LIFESTYLE)
            lifestyle = await self.edit_image(person_image, prompts.lifestyle, step)
        except Exception as exc:
            logger.exception("Photo shoot generation failed at step %s", step)
            raise RemoteCallError(_failure_message(exc), step=step) from exc
        return [portrait, product, lifestyle]

    async def describe(
        self, person_image: str, accessory_image: str
    ) -> SubjectDescriptions:
        """Extract stable text descriptions of the person and accessory."""
        raw = await self.client.describe(
            model=self.describe_model,
            prompt=DESCRIBE_PROMPT,
            images=[person_image, accessory_image],
            schema=DESCRIPTION_SCHEMA,
        )
        return SubjectDescriptions.model_validate(raw)

    async def edit_image(self, base_image: str, prompt: str, step: str) -> str:
        """Run one edit call and return the first image it produced."""
        parts = await self.client.edit(
            model=self.edit_model, prompt=prompt, image=base_image
        )
        for part in parts:
            if part.is_image:
                logger.info("Generated %s image", step)
                return part.to_data_url()
        raise GenerationFailure(
            f"Image editing failed to produce an image for the {step} shot.",
            step=step,
        )


def style_prompt(style: str) -> str:
    """Return the style phrase, falling back to the editorial look."""
    return STYLE_PROMPTS.get(style, STYLE_PROMPTS[DEFAULT_STYLE])


def build_prompts(
    descriptions: SubjectDescriptions, scenario: str, style: str
) -> PhotoShootPrompts:
    """Compose the three edit instructions."""
    person = descriptions.person
    accessory = descriptions.accessory
    tail = f"Style: {style_prompt(style)} {COMMON_PROMPT_SUFFIX}"
    portrait = (
        f"Using the provided image of a person ({person}), edit it to be a "
        "professional full-body studio photograph. The person should be wearing "
        f"or using the described accessory ({accessory}). Replace the existing "
        "background with a seamless, neutral light-gray studio backdrop. Adjust "
        "the lighting to be soft and professional, typical of a high-end "
        "photoshoot. Maintain the person's pose and appearance exactly. "
        f"{tail}"
    )
    product = (
        f"Take this image of an accessory ({accessory}) and turn it into a "
        "high-resolution catalog-style product photo. Isolate the accessory by "
        "replacing the background with a pure white one. Add a soft, subtle "
        "shadow underneath the object for realism. Ensure the focus is "
        "tack-sharp on the product, highlighting its details and texture. "
        f"{tail}"
    )
    lifestyle = (
        f"Edit this photograph of a person ({person}). Place them in the "
        f"following scene: {scenario}. The person should now be wearing or "
        f"using the described accessory ({accessory}). The final image should "
        "be a professional lifestyle photograph. The lighting must be natural "
        "and ambient, matching the new environment, and all shadows should be "
        "coherent and realistic. The composition should capture a candid "
        f"moment. {tail}"
    )
    return PhotoShootPrompts(portrait=portrait, product=product, lifestyle=lifestyle)


def _failure_message(exc: Exception) -> str:
    detail = str(exc)
    if not detail:
        return "An unknown error occurred during image generation."
    return f"Failed during image generation process: {detail}"
