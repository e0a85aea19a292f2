from skirmish.state import (
    GameFlow,
    LoadingTracker,
    Menu,
    MenuStack,
    Screen,
    next_screen_after_intro,
)


def title_flow() -> GameFlow:
    flow = GameFlow()
    flow.enter_screen(Screen.TITLE)
    return flow


def test_menu_stack_push_pop():
    stack = MenuStack()
    assert stack.current() is None
    stack.push(Menu.MAIN)
    stack.push(Menu.SETTINGS)
    assert stack.current() is Menu.SETTINGS
    assert stack.pop() is Menu.SETTINGS
    assert stack.current() is Menu.MAIN


def test_menu_stack_pop_empty_returns_none():
    stack = MenuStack()
    assert stack.pop() is None
    assert len(stack) == 0


def test_acquired_menu_survives_pop_and_clear():
    stack = MenuStack()
    stack.push(Menu.MAIN)
    stack.acquire()
    stack.push(Menu.INTRO)
    stack.clear()
    assert stack.current() is Menu.MAIN
    assert stack.pop() is None
    stack.release()
    stack.clear()
    assert stack.current() is None


def test_title_opens_main_menu_and_pauses():
    flow = title_flow()
    assert flow.screen is Screen.TITLE
    assert flow.menus.current() is Menu.MAIN
    assert flow.paused


def test_back_cannot_close_main_menu_on_title():
    flow = title_flow()
    assert flow.back() is None
    assert flow.menus.current() is Menu.MAIN


def test_intro_then_back_returns_to_main():
    flow = title_flow()
    flow.open_menu(Menu.INTRO)
    assert flow.menus.current() is Menu.INTRO
    assert flow.back() is Menu.INTRO
    assert flow.menus.current() is Menu.MAIN


def test_entering_gameplay_closes_menus_and_unpauses():
    flow = title_flow()
    flow.open_menu(Menu.SETTINGS)
    flow.tick(2.0)
    flow.enter_screen(Screen.GAMEPLAY)
    assert flow.menus.current() is None
    assert not flow.paused
    assert flow.screen_time == 0.0


def test_pause_menu_in_gameplay_can_close():
    flow = title_flow()
    flow.enter_screen(Screen.GAMEPLAY)
    flow.open_menu(Menu.PAUSE)
    flow.open_menu(Menu.SETTINGS)
    assert flow.paused
    flow.close_menu()
    assert flow.menus.current() is None
    assert not flow.paused


def test_quit_to_title_reopens_main_menu():
    flow = title_flow()
    flow.enter_screen(Screen.GAMEPLAY)
    flow.open_menu(Menu.PAUSE)
    flow.enter_screen(Screen.TITLE)
    assert flow.menus.current() is Menu.MAIN
    assert len(flow.menus) == 1


def test_tick_only_counts_with_a_screen():
    flow = GameFlow()
    assert flow.tick(1.0) == 0.0
    flow.enter_screen(Screen.GAMEPLAY)
    first = flow.tick(0.25)
    second = flow.tick(0.25)
    assert second == first * 2


def test_restart_resets_screen_time():
    flow = GameFlow()
    flow.enter_screen(Screen.GAMEPLAY)
    flow.tick(3.0)
    flow.enter_screen(Screen.GAMEPLAY)
    assert flow.screen_time == 0.0
    assert flow.screen is Screen.GAMEPLAY


def test_loading_tracker_reports_completion_once():
    tracker = LoadingTracker()
    assert tracker.update(0, 3) is False
    assert tracker.update(1, 3) is False
    assert tracker.update(3, 3) is True
    assert tracker.update(3, 3) is False
    assert tracker.last_done == 3


def test_next_screen_after_intro():
    assert next_screen_after_intro(3, 3) is Screen.GAMEPLAY
    assert next_screen_after_intro(4, 3) is Screen.GAMEPLAY
    assert next_screen_after_intro(1, 3) is Screen.LOADING