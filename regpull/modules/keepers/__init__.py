from .downloaders import DownloadTarget, FetchResult, ProgressCounter, fetch_blob
from .puller import pull, list_image_tags, PullResult, image_dir
from .console import Tee, print_progress, end_line
