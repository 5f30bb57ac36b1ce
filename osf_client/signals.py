from blinker import Namespace

_osf = Namespace()

request_started = _osf.signal('request-started')

request_finished = _osf.signal('request-finished')

relationship_resolved = _osf.signal('relationship-resolved')

relationship_failed = _osf.signal('relationship-failed')
