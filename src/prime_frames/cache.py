import logging
import threading


logger = logging.getLogger(__name__)


class TransformCache(object):
    """Memoizes computed ground transforms under the stamp of a state.

    Holds one entry per key. An entry computed under an older stamp is never
    returned; it gets overwritten by the next miss for the same key.
    """
    def __init__(self):
        self._entries = {}
        self._lock    = threading.Lock()

    def lookup(self, key, stamp, compute):
        """Returns the value stored for `key` under `stamp`, computing it on a miss.

        :param key:     Identity of the cached quantity, e.g. a frame's arena index
        :type  key:     hashable
        :param stamp:   Stamp of the state the value is valid for
        :type  stamp:   int
        :param compute: Called without arguments on a miss
        :type  compute: function
        """
        entry = self._entries.get(key)
        if entry is not None and entry[0] == stamp:
            return entry[1]

        value = compute()
        logger.debug('Cache miss for %s at stamp %d', key, stamp)

        with self._lock:
            # Another thread may have populated the entry in the meantime
            entry = self._entries.get(key)
            if entry is not None and entry[0] == stamp:
                return entry[1]
            self._entries[key] = (stamp, value)
        return value

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __contains__(self, key_stamp):
        key, stamp = key_stamp
        entry = self._entries.get(key)
        return entry is not None and entry[0] == stamp

    def __len__(self):
        return len(self._entries)
