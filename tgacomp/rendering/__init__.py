from .preview import from_pil_image, load_image, save_preview, to_pil_image

__all__ = ["from_pil_image", "load_image", "save_preview", "to_pil_image"]
