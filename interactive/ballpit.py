import math
import random
from typing import List, Set, Tuple

import pygame

from regionquadtree import QuadTree

# ---------------------------- Ball object ---------------------------- #


class Ball:
    __slots__ = ("color", "mass", "r", "restitution", "vx", "vy", "x", "y")

    def __init__(
        self,
        x: float,
        y: float,
        r: int = 10,
        color: Tuple[int, int, int] = (255, 0, 0),
        vx: float = 0.0,
        vy: float = 0.0,
        mass: float = 1.0,
        restitution: float = 0.7,
    ):
        self.x = float(x)
        self.y = float(y)
        self.vx = float(vx)
        self.vy = float(vy)
        self.r = int(r)
        self.color = color
        self.mass = float(mass)
        self.restitution = float(restitution)

    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def neighborhood(self) -> Tuple[float, float, float, float]:
        """Box around the ball wide enough to catch any overlapping ball."""
        reach = 2 * self.r
        return (self.x - reach, self.y - reach, self.x + reach, self.y + reach)

    def integrate(self, ax: float, ay: float, dt: float):
        self.vx += ax * dt
        self.vy += ay * dt
        self.x += self.vx * dt
        self.y += self.vy * dt

    def clamp_to_bounds(self, w: int, h: int):
        if self.y + self.r > h:
            self.y = h - self.r
            self.vy = -self.vy * self.restitution
        if self.y - self.r < 0:
            self.y = self.r
            self.vy = -self.vy * self.restitution
        if self.x - self.r < 0:
            self.x = self.r
            self.vx = -self.vx * self.restitution
        if self.x + self.r > w:
            self.x = w - self.r
            self.vx = -self.vx * self.restitution

    def draw(self, screen):
        pygame.draw.circle(screen, self.color, (int(self.x), int(self.y)), self.r)


# ------------------------- Collision utilities ------------------------- #


def _inverse_mass(b: Ball) -> float:
    return 0.0 if b.mass == 0 else 1.0 / b.mass


def resolve_ball_ball(a: Ball, b: Ball):
    """Push overlapping balls apart, then exchange an impulse along the normal."""
    dx = b.x - a.x
    dy = b.y - a.y
    dist = math.hypot(dx, dy)
    rsum = a.r + b.r
    if dist == 0 or dist > rsum:
        return

    nx, ny = dx / dist, dy / dist
    inv_a, inv_b = _inverse_mass(a), _inverse_mass(b)
    inv_sum = (inv_a + inv_b) or 1.0

    # Heavier ball moves less
    overlap = rsum - dist
    a.x -= nx * overlap * inv_a / inv_sum
    a.y -= ny * overlap * inv_a / inv_sum
    b.x += nx * overlap * inv_b / inv_sum
    b.y += ny * overlap * inv_b / inv_sum

    closing = (b.vx - a.vx) * nx + (b.vy - a.vy) * ny
    if closing > 0:
        return

    j = -(1 + min(a.restitution, b.restitution)) * closing / inv_sum
    a.vx -= j * nx * inv_a
    a.vy -= j * ny * inv_a
    b.vx += j * nx * inv_b
    b.vy += j * ny * inv_b


# ------------------------------ BallPit ------------------------------ #


class BallPit:
    def __init__(self, screen, width, height):
        self.screen = screen
        self.width = width
        self.height = height
        self.gravity = 980.0  # px/s^2
        self.show_nodes = False
        self.balls: List[Ball] = []
        self.qt: QuadTree[Ball] = self._new_tree()

    def _new_tree(self) -> QuadTree[Ball]:
        return QuadTree((0, 0, self.width, self.height), capacity=16)

    def add_ball(self, x, y, radius=10, color=(255, 0, 0)):
        vx = (random.random() - 0.5) * 300.0
        ball = Ball(x, y, r=radius, color=color, vx=vx, mass=1.0, restitution=0.7)
        self.balls.append(ball)
        self.qt.insert(ball)

    def rebuild_quadtree(self):
        # The tree has no delete, so moving balls means a fresh tree per step
        self.qt = self._new_tree()
        self.qt.insert_many(self.balls)

    def update(self, dt: float):
        ax, ay = 0.0, self.gravity
        for b in self.balls:
            b.integrate(ax, ay, dt)
            b.clamp_to_bounds(self.width, self.height)

        self.rebuild_quadtree()

        processed: Set[Tuple[int, int]] = set()
        for b in self.balls:
            for other in self.qt.query(b.neighborhood()):
                if other is b:
                    continue
                key = tuple(sorted((id(b), id(other))))
                if key in processed:
                    continue
                processed.add(key)
                resolve_ball_ball(b, other)

        self.rebuild_quadtree()

    def draw(self):
        if self.show_nodes:
            for x0, y0, x1, y1 in self.qt.get_all_node_boundaries():
                rect = pygame.Rect(int(x0), int(y0), int(x1 - x0), int(y1 - y0))
                pygame.draw.rect(self.screen, (200, 200, 200), rect, 1)
        for ball in self.balls:
            ball.draw(self.screen)


# ------------------------------- main ------------------------------- #


def main():
    pygame.init()
    width, height = 800, 600
    screen = pygame.display.set_mode((width, height))
    clock = pygame.time.Clock()
    ball_pit = BallPit(screen, width, height)

    running = True
    while running:
        dt = clock.tick(60) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_b:
                ball_pit.show_nodes = not ball_pit.show_nodes
            elif event.type == pygame.MOUSEBUTTONDOWN:
                x, y = event.pos
                r = random.randint(8, 18)
                color = (
                    random.randint(80, 255),
                    random.randint(80, 255),
                    random.randint(80, 255),
                )
                ball_pit.add_ball(x, y, radius=r, color=color)

        ball_pit.update(dt)

        screen.fill((255, 255, 255))
        ball_pit.draw()
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
