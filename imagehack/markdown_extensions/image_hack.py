# Markdown extension that gives images a little more to say.
#
#    ![^A caption](image.png)
#    ![*Alt text](image.png)
#    ![Linked]([image.png])
#    ![](clip.mp4 "> autoplay muted loop")
#    ![](image.png "A title > 400x300 .rounded #hero")
#
# turns into
#
#    <figure><img src="image.png" alt="A caption"><figcaption>A caption</figcaption></figure>
#    <figure><img src="image.png" alt="Alt text"></figure>
#    <p><a href="image.png" target="_blank"><img src="image.png" alt="Linked"></a></p>
#    <video autoplay="" muted="" loop=""><source src="clip.mp4" type="video/mp4"></video>
#    <p><img src="image.png" title="A title" alt="" width="400" height="300" class="rounded" id="hero"></p>
#
# Raw HTML in the document is stashed by Markdown before tree processors run,
# so only Markdown image syntax is seen here. Use imagehack.fragments for HTML.

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from ..rewriter import rewrite_tree
from ..settings import DEFAULTS, ImageHackSettings


class ImageHackTreeProcessor(Treeprocessor):
    def __init__(self, md, settings):
        super().__init__(md)
        self.settings = settings

    def run(self, root):
        rewrite_tree(root, self.settings)


class ImageHackExtension(Extension):
    """ Captions, autolinks, video/audio conversion and title attributes for images """

    def __init__(self, **kwargs):
        self.config = {
            "enable": [DEFAULTS["enable"],
                       "Set to False to leave images untouched"],
            "figure_caption_position": [DEFAULTS["figure_caption_position"],
                                        "Put the figcaption 'above' or 'below' the media"],
            "always_add_controls_for_videos": [DEFAULTS["always_add_controls_for_videos"],
                                               "Add controls to images converted into videos"],
            "always_add_controls_for_audio": [DEFAULTS["always_add_controls_for_audio"],
                                              "Add controls to images converted into audio"],
            "unravel_paragraphs": [DEFAULTS["unravel_paragraphs"],
                                   "Lift figures, videos and audio out of paragraphs"],
        }
        super().__init__(**kwargs)

    def extendMarkdown(self, md):
        settings = ImageHackSettings.from_dict(self.getConfigs())
        # after the inline processor (20) has turned ![]() into <img>
        md.treeprocessors.register(ImageHackTreeProcessor(md, settings), "image_hack", 15)


def makeExtension(**kwargs):
    return ImageHackExtension(**kwargs)
