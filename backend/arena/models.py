class Player:
    """One connected session's avatar. Only the world store holds these."""

    def __init__(self, id, x, y, score=0):
        self.id = id
        self.x = x
        self.y = y
        self.score = score

    @property
    def position(self):
        return (self.x, self.y)

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'score': self.score,
            'id': self.id,
        }

    def __repr__(self):
        return f"<Player {self.id} ({self.x}, {self.y}) score={self.score}>"


class Collectible:
    def __init__(self, id, x, y, value):
        self.id = id
        self.x = x
        self.y = y
        self.value = value

    def to_dict(self):
        return {
            'x': self.x,
            'y': self.y,
            'value': self.value,
            'id': self.id,
        }

    def __repr__(self):
        return f"<Collectible {self.id} ({self.x}, {self.y}) value={self.value}>"
