from .channel_averager import ChannelAverager
from .color_quantizer import ColorBucket, ColorQuantizer
from .request_queue import PendingRequest, RequestQueue
