from .errors import ConfigError

CAPTION_POSITIONS = ("above", "below")

DEFAULTS = {
    "enable": True,
    "figure_caption_position": "below",
    "always_add_controls_for_videos": False,
    "always_add_controls_for_audio": False,
    "unravel_paragraphs": True,
}


class ImageHackSettings:
    """ Options controlling a rewrite pass, validated up front """

    def __init__(self, **options):
        unknown = sorted(set(options) - set(DEFAULTS))
        if unknown:
            raise ConfigError("Unknown option : " + ", ".join(unknown), unknown[0])

        settings = dict(DEFAULTS)
        settings.update(options)

        for name in ("enable", "always_add_controls_for_videos",
                     "always_add_controls_for_audio", "unravel_paragraphs"):
            if not isinstance(settings[name], bool):
                raise ConfigError("Option must be true or false : " + name, name)

        if settings["figure_caption_position"] not in CAPTION_POSITIONS:
            raise ConfigError("figure_caption_position must be one of "
                              + ", ".join(CAPTION_POSITIONS), "figure_caption_position")

        self.enable                         = settings["enable"]
        self.figure_caption_position        = settings["figure_caption_position"]
        self.always_add_controls_for_videos = settings["always_add_controls_for_videos"]
        self.always_add_controls_for_audio  = settings["always_add_controls_for_audio"]
        self.unravel_paragraphs             = settings["unravel_paragraphs"]

    @classmethod
    def from_dict(cls, options):
        if options is None:
            return cls()
        return cls(**options)

    def captions_above(self):
        return self.figure_caption_position == "above"

    def adds_controls(self, kind):
        if kind == "video":
            return self.always_add_controls_for_videos
        if kind == "audio":
            return self.always_add_controls_for_audio
        return False
